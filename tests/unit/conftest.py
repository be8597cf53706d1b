"""
Shared fixtures for unit tests
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemaforge.schemas import validate_schema


def _field(name, field_type, required=True, **extra):
    data = {"name": name, "type": field_type, "isRequired": required, "isUnique": False, "isId": False}
    data.update(extra)
    return data


@pytest.fixture
def blog_schema():
    """User/Post schema covering every field type and both relation shapes"""
    return validate_schema({
        "models": [
            {
                "name": "User",
                "fields": [
                    _field("id", "string", isId=True, isUnique=True),
                    _field("email", "string", isUnique=True, description="Login address"),
                    _field("nickname", "string", required=False),
                    _field("role", "enum", enumValues=["ADMIN", "EDITOR", "AUTHOR"]),
                    _field("tags", "string", isList=True),
                    _field("createdAt", "datetime"),
                    _field("updatedAt", "datetime"),
                    _field("posts", "relation", isList=True,
                           relation={"model": "Post", "type": "one-to-many"}),
                ],
            },
            {
                "name": "Post",
                "fields": [
                    _field("id", "string", isId=True),
                    _field("title", "string"),
                    _field("views", "number"),
                    _field("published", "boolean"),
                    _field("publishedOn", "date", required=False),
                    _field("meta", "json", required=False),
                    _field("visibility", "enum", enumValues=["PUBLIC", "PRIVATE"]),
                    _field("labels", "enum", isList=True, required=False, enumValues=["HOT", "NEW"]),
                    _field("mood", "enum"),
                    _field("author", "relation", required=False,
                           relation={"model": "User", "type": "one-to-one", "foreignKey": "authorId"}),
                    _field("authorId", "string"),
                    _field("created_at", "datetime"),
                ],
            },
        ],
        "enums": [
            {"name": "Role", "values": ["ADMIN", "EDITOR", "AUTHOR"]},
        ],
    })
