"""
Unit Tests for the Prisma Schema Parser
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemaforge.parsers import PrismaSchemaParser, parse_schema
from schemaforge.schemas import FieldType, RelationType, InputFormat


BLOG_SCHEMA = """
enum Role {
  ADMIN
  EDITOR
  // legacy
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
  views     Int      @default(0)
  rating    Float?
  tags      String[]
  meta      Json?
  published Boolean  @default(false)
  author    User     @relation(fields: [authorId], references: [id])
  authorId  String
  // internal note
  @@index([authorId])
}
"""


@pytest.fixture
def parser():
    return PrismaSchemaParser()


@pytest.fixture
def blog(parser):
    return parser.parse(BLOG_SCHEMA)


def field_map(model):
    return {f.name: f for f in model.fields}


class TestPrismaModels:
    """Tests for model block parsing"""

    def test_models_in_order(self, blog):
        """Models appear in source order"""
        assert [m.name for m in blog.models] == ["User", "Post"]

    def test_minimal_model(self, parser):
        """One model with id, email and name yields exactly those fields"""
        schema = parser.parse(
            "model Account {\n"
            "  id    String @id\n"
            "  email String @unique\n"
            "  name  String\n"
            "}\n"
        )
        model = schema.models[0]
        assert model.name == "Account"
        assert [f.name for f in model.fields] == ["id", "email", "name"]
        assert [f.is_id for f in model.fields] == [True, False, False]
        assert model.fields[1].is_unique

    def test_scalar_types(self, blog):
        """Prisma scalars map onto the closed field types"""
        fields = field_map(blog.models[1])
        assert fields["title"].type == FieldType.STRING
        assert fields["views"].type == FieldType.NUMBER
        assert fields["rating"].type == FieldType.NUMBER
        assert fields["published"].type == FieldType.BOOLEAN
        assert fields["meta"].type == FieldType.JSON
        assert field_map(blog.models[0])["createdAt"].type == FieldType.DATETIME

    def test_optional_marker(self, blog):
        """A ? makes the field optional"""
        fields = field_map(blog.models[0])
        assert fields["name"].is_required is False
        assert fields["email"].is_required is True

    def test_scalar_list(self, blog):
        """String[] is a list of strings"""
        tags = field_map(blog.models[1])["tags"]
        assert tags.type == FieldType.STRING
        assert tags.is_list

    def test_defaults(self, blog):
        """@default captures its argument, nested parentheses included"""
        user = field_map(blog.models[0])
        post = field_map(blog.models[1])
        assert user["id"].default == "cuid()"
        assert user["role"].default == "AUTHOR"
        assert user["createdAt"].default == "now()"
        assert post["views"].default == "0"
        assert post["title"].default is None

    def test_updated_at_is_not_id(self, blog):
        """@updatedAt is not mistaken for @id"""
        assert field_map(blog.models[0])["updatedAt"].is_id is False

    def test_block_attributes_and_comments_skipped(self, blog):
        """@@ lines and comments inside models produce no fields"""
        names = [f.name for f in blog.models[1].fields]
        assert names == ["id", "title", "views", "rating", "tags", "meta", "published", "author", "authorId"]


class TestPrismaRelations:
    """Tests for relation inference"""

    def test_one_to_many(self, blog):
        """A list of models is one-to-many"""
        posts = field_map(blog.models[0])["posts"]
        assert posts.type == FieldType.RELATION
        assert posts.relation.model == "Post"
        assert posts.relation.type == RelationType.ONE_TO_MANY
        assert posts.relation.foreign_key is None

    def test_one_to_one_with_foreign_key(self, blog):
        """@relation(fields: [x]) sets the foreign key"""
        author = field_map(blog.models[1])["author"]
        assert author.relation.model == "User"
        assert author.relation.type == RelationType.ONE_TO_ONE
        assert author.relation.foreign_key == "authorId"

    def test_symmetric_lists_not_many_to_many(self, parser):
        """Arrays on both sides stay one-to-many"""
        schema = parser.parse(
            "model Tag {\n  id String @id\n  posts Post[]\n}\n"
            "model Post {\n  id String @id\n  tags Tag[]\n}\n"
        )
        for model in schema.models:
            relation = model.fields[1].relation
            assert relation.type == RelationType.ONE_TO_MANY


class TestPrismaEnums:
    """Tests for enum blocks"""

    def test_enum_values(self, blog):
        """Enum values keep order and skip comments"""
        assert blog.enums[0].name == "Role"
        assert blog.enums[0].values == ["ADMIN", "EDITOR", "AUTHOR"]

    def test_enum_field(self, blog):
        """A field typed with an earlier enum resolves to it"""
        role = field_map(blog.models[0])["role"]
        assert role.type == FieldType.ENUM
        assert role.enum_values == ["ADMIN", "EDITOR", "AUTHOR"]
        assert role.relation is None

    def test_forward_enum_reference_is_relation(self, parser):
        """An enum declared after the model does not resolve"""
        schema = parser.parse(
            "model User {\n  id String @id\n  role Role\n}\n"
            "enum Role {\n  ADMIN\n}\n"
        )
        role = schema.models[0].fields[1]
        assert role.type == FieldType.RELATION
        assert role.relation.model == "Role"
        assert schema.enums[0].name == "Role"


class TestPrismaDegradation:
    """Unrecognized input is dropped, never raised"""

    def test_unparseable_line_dropped(self, parser):
        """A line without a type token is skipped"""
        schema = parser.parse("model Foo {\n  id String @id\n  broken\n  name String\n}\n")
        assert [f.name for f in schema.models[0].fields] == ["id", "name"]

    def test_unterminated_block_dropped(self, parser):
        """A block with no closing brace contributes nothing"""
        schema = parser.parse("model Foo {\n  id String @id\n")
        assert schema.models == []

    def test_other_blocks_ignored(self, parser):
        """datasource and generator blocks produce no models"""
        schema = parser.parse(
            'datasource db {\n  provider = "postgresql"\n}\n'
            'generator client {\n  provider = "prisma-client-js"\n}\n'
            "model Foo {\n  id String @id\n}\n"
        )
        assert [m.name for m in schema.models] == ["Foo"]
        assert schema.enums == []

    def test_empty_input(self, parser):
        """Empty text yields an empty schema"""
        schema = parser.parse("")
        assert schema.models == []
        assert schema.enums == []


class TestParseSchemaEntryPoint:
    """Tests for parse_schema dispatch"""

    def test_prisma_tag(self):
        """The prisma tag routes to the Prisma parser"""
        schema = parse_schema(BLOG_SCHEMA, "prisma")
        assert len(schema.models) == 2

    def test_english_returns_none(self):
        """English is left to the LLM adapter"""
        assert parse_schema("users have names", InputFormat.ENGLISH) is None

    def test_unknown_tag(self):
        """Unknown tags raise UnknownFormatError"""
        from schemaforge.utils import UnknownFormatError

        with pytest.raises(UnknownFormatError) as exc_info:
            parse_schema("model Foo {}", "graphql")
        assert "graphql" in str(exc_info.value)
