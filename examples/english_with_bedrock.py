#!/usr/bin/env python3
"""
English Description Example for SchemaForge

Requires AWS credentials with Bedrock access (see README for env vars).

This example demonstrates:
1. Turning a plain-English data model into the IR via Claude on Bedrock
2. Rendering tRPC routers and React forms through the model
"""
import sys
import os

# Add src to path for local development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from schemaforge import (
    SchemaForgeError,
    SchemaPipeline,
    SystemConfig,
    setup_logging,
)
from schemaforge.llm_client import get_llm_client
from schemaforge.utils import format_error_for_user


SAAS_DESCRIPTION = """
A project management SaaS. Organizations have a name, a URL slug and a plan
(free, pro or enterprise). Users belong to an organization and have an
email, a display name and a role (owner, admin or member). Projects belong
to an organization and have a name, an optional description and an
archived flag. Tasks belong to a project, have a title, a status (todo,
in progress, done), an optional due date and an optional assignee who is
a user.
"""


def main():
    config = SystemConfig.from_env()
    setup_logging(level=config.log_level, json_format=config.json_logs)

    pipeline = SchemaPipeline(
        llm_client=get_llm_client(config.llm),
        llm_config=config.llm,
    )

    try:
        parsed = pipeline.parse(SAAS_DESCRIPTION)
        print(parsed.schema.to_json(indent=2))

        router = pipeline.generate(parsed.schema, "trpc", config.generation)
        print(router.code)

        forms = pipeline.generate(parsed.schema, "react-form", config.generation)
        print(forms.code)
    except SchemaForgeError as e:
        print(format_error_for_user(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
