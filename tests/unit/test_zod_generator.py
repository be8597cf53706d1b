"""
Unit Tests for the Zod Schema Generator
"""
import re
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemaforge.config import GenerationConfig
from schemaforge.generators import ZodSchemaGenerator
from schemaforge.schemas import AUTO_MANAGED_FIELD_NAMES


@pytest.fixture
def generator():
    return ZodSchemaGenerator()


@pytest.fixture
def output(generator, blog_schema):
    return generator.render(blog_schema, GenerationConfig())


def object_keys(code, const_name):
    """Keys of a rendered `export const <name> = z.object({...});` block"""
    match = re.search(rf"export const {const_name} = z\.object\(\{{\n(.*?)\n\}}\);", code, re.DOTALL)
    assert match, f"{const_name} not rendered"
    return [line.strip().split(":")[0] for line in match.group(1).split("\n")]


class TestZodStructure:
    """Tests for the overall shape of schemas.ts"""

    def test_import_first(self, output):
        """The zod import opens the file"""
        assert output.startswith('import { z } from "zod";\n')

    def test_enum_schema(self, output):
        """Top-level enums become z.enum constants with inferred types"""
        assert 'export const roleSchema = z.enum(["ADMIN", "EDITOR", "AUTHOR"]);' in output
        assert "export type Role = z.infer<typeof roleSchema>;" in output

    def test_model_constructs(self, output):
        """Each model gets full, create and update schemas plus types"""
        assert "export const userSchema = z.object({" in output
        assert "export const createUserSchema = z.object({" in output
        assert "export const updateUserSchema = createUserSchema.partial();" in output
        assert "export type User = z.infer<typeof userSchema>;" in output
        assert "export type CreateUserInput = z.infer<typeof createUserSchema>;" in output
        assert "export type UpdateUserInput = z.infer<typeof updateUserSchema>;" in output

    def test_models_in_order(self, output):
        """Models render in IR order"""
        assert output.index("export const userSchema") < output.index("export const postSchema")

    def test_relations_excluded(self, output):
        """Relation fields are not part of any Zod object"""
        assert "posts:" not in output
        assert "author:" not in output
        assert "authorId: z.string().min(1)," in output


class TestZodFieldTypes:
    """Tests for the field -> validator mapping"""

    def test_id_is_uuid(self, output):
        """Id fields are UUID strings"""
        assert "  id: z.string().uuid()," in output

    def test_required_string_strict(self, output):
        """Required strings are non-empty in strict mode"""
        assert "  email: z.string().min(1)," in output

    def test_optional_string(self, output):
        """Optional strings are plain and optional"""
        assert "  nickname: z.string().optional()," in output

    def test_scalars(self, output):
        """Numbers, booleans, dates and json"""
        assert "  views: z.number()," in output
        assert "  published: z.boolean()," in output
        assert "  publishedOn: z.coerce.date().optional()," in output
        assert "  createdAt: z.coerce.date()," in output
        assert "  meta: z.record(z.string(), z.unknown()).optional()," in output

    def test_shared_enum_referenced(self, output):
        """Values matching a top-level enum reference its schema"""
        assert "  role: roleSchema," in output
        assert output.count("z.enum([") == 3

    def test_inline_enum(self, output):
        """Values with no top-level enum are inlined"""
        assert '  visibility: z.enum(["PUBLIC", "PRIVATE"]),' in output

    def test_list_then_optional(self, output):
        """Lists wrap the base validator; optional applies after"""
        assert '  labels: z.array(z.enum(["HOT", "NEW"])).optional(),' in output
        assert "  tags: z.array(z.string().min(1))," in output

    def test_enum_without_values(self, output):
        """An enum field with no values falls back to string"""
        assert "  mood: z.string()," in output

    def test_strict_mode_off(self, generator, blog_schema):
        """strictMode=false drops the non-empty constraint"""
        code = generator.render(blog_schema, GenerationConfig(strict_mode=False))
        assert ".min(1)" not in code
        assert "  email: z.string()," in code


class TestZodCreateUpdateLaw:
    """Create drops auto-managed fields; update is create made partial"""

    @pytest.mark.parametrize("model_name", ["User", "Post"])
    def test_create_fields(self, output, blog_schema, model_name):
        model = blog_schema.get_model(model_name)
        full_schema = model_name[0].lower() + model_name[1:] + "Schema"
        full = object_keys(output, full_schema)
        create = object_keys(output, f"create{model_name}Schema")

        expected = [
            name for name in full
            if name not in AUTO_MANAGED_FIELD_NAMES
            and not next(f for f in model.fields if f.name == name).is_id
        ]
        assert create == expected

    def test_timestamps_excluded(self, output):
        """Every timestamp variant is left out of create schemas"""
        create_post = object_keys(output, "createPostSchema")
        assert "created_at" not in create_post
        assert "id" not in create_post
        assert "created_at" in object_keys(output, "postSchema")

    def test_update_derived_from_create(self, output):
        """Update schemas are the create schema with .partial()"""
        assert "export const updatePostSchema = createPostSchema.partial();" in output


class TestZodComments:
    """Tests for includeComments"""

    def test_comments_on(self, output):
        """Doc comments precede each construct"""
        assert "/** Role enum values */\nexport const roleSchema" in output
        assert "/** Full User schema with all fields */\nexport const userSchema" in output
        assert "/** Schema for creating a new User */" in output
        assert "/** Schema for updating a User (all fields optional) */" in output

    def test_comments_off(self, generator, blog_schema):
        """No comment lines at all when disabled"""
        code = generator.render(blog_schema, GenerationConfig(include_comments=False))
        assert "/**" not in code
        assert "\n\n\n" not in code


class TestZodDeterminism:
    """render() is a pure function"""

    def test_byte_identical(self, generator, blog_schema):
        config = GenerationConfig()
        assert generator.render(blog_schema, config) == generator.render(blog_schema, config)

    def test_schema_untouched(self, generator, blog_schema):
        before = blog_schema.model_dump()
        generator.render(blog_schema, GenerationConfig())
        assert blog_schema.model_dump() == before

    def test_values_are_escaped(self, generator):
        """Enum values are emitted as valid string literals"""
        from schemaforge.schemas import DatabaseSchema, EnumSchema

        schema = DatabaseSchema(models=[], enums=[EnumSchema(name="Quote", values=['say "hi"'])])
        code = generator.render(schema, GenerationConfig())
        assert 'z.enum(["say \\"hi\\""])' in code
