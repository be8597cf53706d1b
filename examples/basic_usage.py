#!/usr/bin/env python3
"""
Basic Usage Example for SchemaForge

This example demonstrates:
1. Parsing a Prisma schema and SQL DDL without any LLM calls
2. Generating Zod schemas and TypeScript types
3. Inspecting the intermediate representation
"""
import sys
import os

# Add src to path for local development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from schemaforge import (
    GenerationConfig,
    SchemaPipeline,
    setup_logging,
)


BLOG_PRISMA = """
enum Role {
  ADMIN
  EDITOR
  AUTHOR
}

model User {
  id        String   @id @default(cuid())
  email     String   @unique
  name      String?
  role      Role     @default(AUTHOR)
  posts     Post[]
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt
}

model Post {
  id        String   @id @default(cuid())
  title     String
  content   String?
  published Boolean  @default(false)
  author    User     @relation(fields: [authorId], references: [id])
  authorId  String
  createdAt DateTime @default(now())
}
"""

ECOMMERCE_SQL = """
CREATE TYPE order_status AS ENUM ('pending', 'paid', 'shipped', 'delivered', 'cancelled');

CREATE TABLE customers (
  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
  email VARCHAR(255) NOT NULL UNIQUE,
  full_name VARCHAR(255) NOT NULL,
  created_at TIMESTAMP NOT NULL DEFAULT now()
);

CREATE TABLE orders (
  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
  customer_id UUID NOT NULL REFERENCES customers(id),
  status order_status NOT NULL DEFAULT 'pending',
  total DECIMAL(10,2) NOT NULL,
  created_at TIMESTAMP NOT NULL DEFAULT now()
);
"""


def main():
    setup_logging(level="WARNING")

    print("=" * 60)
    print("SchemaForge - Basic Usage Example")
    print("=" * 60)

    pipeline = SchemaPipeline()

    print("\n1. Parsing Prisma schema...")
    parsed = pipeline.parse(BLOG_PRISMA)
    print(f"   Detected format: {parsed.input_format.value}")
    for model in parsed.schema.models:
        print(f"   - {model.name}: {', '.join(f.name for f in model.fields)}")

    print("\n2. Generating Zod schemas...")
    zod = pipeline.generate(parsed.schema, "zod")
    print(zod.code)

    print("\n3. Parsing SQL DDL...")
    parsed_sql = pipeline.parse(ECOMMERCE_SQL)
    print(parsed_sql.schema.to_json(indent=2))

    print("\n4. Generating TypeScript types (no comments)...")
    types = pipeline.generate(
        parsed_sql.schema,
        "types",
        GenerationConfig(include_comments=False),
    )
    print(types.code)
    print(f"\n   Rendered in {types.duration_ms}ms")


if __name__ == "__main__":
    main()
