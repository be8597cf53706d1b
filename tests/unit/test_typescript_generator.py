"""
Unit Tests for the TypeScript Type Definition Generator
"""
import re
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemaforge.config import GenerationConfig
from schemaforge.generators import TypeScriptGenerator


@pytest.fixture
def generator():
    return TypeScriptGenerator()


@pytest.fixture
def output(generator, blog_schema):
    return generator.render(blog_schema, GenerationConfig())


def interface_members(code, name):
    match = re.search(rf"export interface {name}(?: extends \w+)? \{{\n(.*?)\n\}}", code, re.DOTALL)
    assert match, f"{name} not rendered"
    return [
        line.strip() for line in match.group(1).split("\n")
        if not line.strip().startswith("/**")
    ]


class TestTypeDeclarations:
    """Tests for the declarations in types.ts"""

    def test_enum_union(self, output):
        """Top-level enums become string literal unions"""
        assert 'export type Role = "ADMIN" | "EDITOR" | "AUTHOR";' in output

    def test_branded_ids(self, output):
        """Each model gets a branded id type"""
        assert 'export type UserId = string & { __brand: "UserId" };' in output
        assert 'export type PostId = string & { __brand: "PostId" };' in output

    def test_entity_interface(self, output):
        """Full interfaces hold every non-relation field"""
        assert interface_members(output, "User") == [
            "id: UserId;",
            "email: string;",
            "nickname?: string;",
            "role: Role;",
            "tags: string[];",
            "createdAt: Date;",
            "updatedAt: Date;",
        ]

    def test_field_types(self, output):
        """Scalars, inline enums and json"""
        members = interface_members(output, "Post")
        assert "views: number;" in members
        assert "published: boolean;" in members
        assert "publishedOn?: Date;" in members
        assert "meta?: Record<string, unknown>;" in members
        assert 'visibility: "PUBLIC" | "PRIVATE";' in members
        assert "mood: string;" in members

    def test_inline_union_list_parenthesized(self, output):
        """A list of an inline union keeps its element type intact"""
        assert 'labels?: ("HOT" | "NEW")[];' in interface_members(output, "Post")

    def test_create_input(self, output):
        """Create inputs drop id and timestamps"""
        assert interface_members(output, "CreateUserInput") == [
            "email: string;",
            "nickname?: string;",
            "role: Role;",
            "tags: string[];",
        ]
        create_post = interface_members(output, "CreatePostInput")
        assert not any(m.startswith(("id", "created_at")) for m in create_post)

    def test_update_input(self, output):
        """Update inputs are the create input made partial"""
        assert "export type UpdateUserInput = Partial<CreateUserInput>;" in output
        assert "export type UpdatePostInput = Partial<CreatePostInput>;" in output

    def test_with_relations(self, output):
        """WithRelations extends the entity with loaded relations"""
        assert interface_members(output, "UserWithRelations") == ["posts: Post[];"]
        assert interface_members(output, "PostWithRelations") == ["author?: User;"]

    def test_no_with_relations_without_relations(self, generator):
        """Models without relations get no WithRelations interface"""
        from schemaforge.schemas import validate_schema

        schema = validate_schema({"models": [{"name": "Tag", "fields": [
            {"name": "id", "type": "string", "isRequired": True, "isUnique": True, "isId": True},
        ]}]})
        assert "WithRelations" not in generator.render(schema, GenerationConfig())

    def test_utility_types(self, output):
        """Pagination and sorting helpers close the file"""
        assert "export interface Paginated<T> {" in output
        assert 'export type SortDirection = "asc" | "desc";' in output
        assert "export interface SortBy<T> {" in output
        assert output.rstrip().endswith("}")


class TestTypeComments:
    """Tests for includeComments"""

    def test_field_description(self, output):
        """Field descriptions become doc comments on the entity"""
        assert "  /** Login address */\n  email: string;" in output

    def test_construct_comments(self, output):
        assert "/** Full User entity */" in output
        assert "/** Input for creating a new User */" in output
        assert "/** User with all relations loaded */" in output

    def test_description_cannot_close_comment(self, generator):
        """Comment terminators and newlines in descriptions stay inside the doc comment"""
        from schemaforge.schemas import validate_schema

        schema = validate_schema({"models": [{"name": "Note", "fields": [
            {"name": "id", "type": "string", "isRequired": True, "isUnique": True, "isId": True},
            {"name": "body", "type": "string", "isRequired": True, "isUnique": False, "isId": False,
             "description": "Markdown */ text\nspanning  lines"},
        ]}]})
        code = generator.render(schema, GenerationConfig())

        assert "  /** Markdown *\\/ text spanning lines */\n  body: string;" in code
        assert code.count("*/") == code.count("/**")

    def test_comments_off(self, generator, blog_schema):
        """No doc comments when disabled"""
        code = generator.render(blog_schema, GenerationConfig(include_comments=False))
        assert "/**" not in code


class TestTypeDeterminism:
    """render() is a pure function"""

    def test_byte_identical(self, generator, blog_schema):
        config = GenerationConfig(include_comments=False)
        assert generator.render(blog_schema, config) == generator.render(blog_schema, config)

    def test_strict_mode_irrelevant(self, generator, blog_schema):
        """strictMode only affects runtime validators"""
        assert (
            generator.render(blog_schema, GenerationConfig(strict_mode=True))
            == generator.render(blog_schema, GenerationConfig(strict_mode=False))
        )
