"""Tests for the schema_parser module."""

import pytest

from stubgen.config import GeneratorConfig
from stubgen.errors import ConfigurationError
from stubgen.schema_parser import (
    from_model,
    from_property,
    reorder_schemas,
    to_default_value,
)


def _spec():
    """Fresh document per test: from_model writes type names back into schemas."""
    return {
        "components": {
            "schemas": {
                "Address": {
                    "type": "object",
                    "required": ["city"],
                    "properties": {
                        "street": {"type": "string"},
                        "city": {"type": "string"},
                    },
                },
                "Geo": {
                    "type": "object",
                    "properties": {"lat": {"type": "number", "format": "double"}},
                },
                "Office": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Address"},
                        {
                            "type": "object",
                            "required": ["name"],
                            "properties": {"name": {"type": "string"}},
                        },
                    ],
                },
                "Site": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Address"},
                        {"$ref": "#/components/schemas/Geo"},
                    ],
                },
                "Nickname": {"type": "string", "maxLength": 20},
                "Color": {
                    "type": "string",
                    "x-enumeration": True,
                    "minLength": 2,
                    "maxLength": 5,
                },
                "Level": {
                    "type": "integer",
                    "x-enumeration": True,
                    "minimum": 1,
                },
                "EmployeeId": {"type": "string", "x-wrapper": True},
                "OfficeType": {"type": "string", "enum": ["HEAD", "BRANCH"]},
                "Names": {"type": "array", "items": {"type": "string"}},
                "AddressList": {"type": "array", "items": {"$ref": "#/components/schemas/Address"}, "maxItems": 10},
                "Counts": {"type": "object", "additionalProperties": {"type": "integer"}},
            }
        }
    }


def _ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


class TestFromPropertyTypes:
    """Test OpenAPI schema -> Java type conversion."""

    @pytest.mark.parametrize(
        "schema, java_type",
        [
            ({"type": "string"}, "String"),
            ({"type": "string", "format": "date"}, "LocalDate"),
            ({"type": "string", "format": "date-time"}, "OffsetDateTime"),
            ({"type": "string", "format": "byte"}, "byte[]"),
            ({"type": "integer"}, "Integer"),
            ({"type": "integer", "format": "int64"}, "Long"),
            ({"type": "number"}, "BigDecimal"),
            ({"type": "number", "format": "float"}, "Float"),
            ({"type": "boolean"}, "Boolean"),
            ({"type": ["string", "null"]}, "String"),
            ({}, "Object"),
        ],
    )
    def test_primitive(self, schema, java_type):
        assert from_property(_spec(), "value", schema).data_type == java_type

    def test_array(self):
        prop = from_property(_spec(), "tags", {"type": "array", "items": {"type": "string"}})
        assert prop.data_type == "List<String>"
        assert prop.is_list_container
        assert prop.items.data_type == "String"

    def test_map(self):
        prop = from_property(_spec(), "counts", {"type": "object", "additionalProperties": {"type": "integer"}})
        assert prop.data_type == "Map<String, Integer>"
        assert prop.is_map_container

    def test_ref(self):
        prop = from_property(_spec(), "address", _ref("Address"))
        assert prop.data_type == "Address"
        assert prop.complex_type == "Address"
        assert not prop.is_primitive_type

    def test_ref_to_alias_is_unaliased(self):
        prop = from_property(_spec(), "nickname", _ref("Nickname"))
        assert prop.data_type == "String"
        assert prop.max_length == 20

    def test_ref_to_array_is_unaliased(self):
        prop = from_property(_spec(), "addresses", _ref("AddressList"))
        assert prop.data_type == "List<Address>"
        assert prop.is_list_container
        assert prop.items.complex_type == "Address"
        assert prop.max_items == 10

    def test_ref_to_map_is_unaliased(self):
        prop = from_property(_spec(), "counts", _ref("Counts"))
        assert prop.data_type == "Map<String, Integer>"
        assert prop.is_map_container

    def test_array_of_refs(self):
        prop = from_property(_spec(), "offices", {"type": "array", "items": _ref("Office")})
        assert prop.data_type == "List<Office>"
        assert prop.base_type == "Office"

    def test_inline_enum(self):
        prop = from_property(_spec(), "status", {"type": "string", "enum": ["active", "retired"]})
        assert prop.is_enum
        assert prop.data_type == "String"
        assert prop.datatype_with_enum == "StatusEnum"
        assert [c["name"] for c in prop.enum_constants] == ["ACTIVE", "RETIRED"]

    def test_accessors(self):
        assert from_property(_spec(), "active", {"type": "boolean"}).getter == "isActive"
        prop = from_property(_spec(), "first_name", {"type": "string"})
        assert (prop.name, prop.getter, prop.setter) == ("firstName", "getFirstName", "setFirstName")

    def test_client_boolean_getter(self):
        prop = from_property(_spec(), "active", {"type": "boolean"}, GeneratorConfig(flavor="client"))
        assert prop.getter == "getActive"

    def test_required(self):
        assert from_property(_spec(), "city", {"type": "string"}, required=True).required


class TestConstraints:

    def test_bounds_are_text(self):
        prop = from_property(_spec(), "age", {"type": "integer", "minimum": 0, "maximum": 150})
        assert (prop.minimum, prop.maximum) == ("0", "150")

    def test_exclusive_flag(self):
        prop = from_property(_spec(), "age", {"type": "integer", "minimum": 0, "exclusiveMinimum": True})
        assert prop.minimum == "0"
        assert prop.exclusive_minimum

    def test_exclusive_bound(self):
        prop = from_property(_spec(), "age", {"type": "integer", "exclusiveMaximum": 150})
        assert prop.maximum == "150"
        assert prop.exclusive_maximum

    def test_string_and_array_limits(self):
        prop = from_property(_spec(), "code", {"type": "string", "minLength": 1, "maxLength": 8, "pattern": "^[A-Z]+$"})
        assert (prop.min_length, prop.max_length, prop.pattern) == (1, 8, "^[A-Z]+$")
        prop = from_property(_spec(), "tags", {"type": "array", "items": {"type": "string"}, "maxItems": 3})
        assert prop.max_items == 3


class TestEnumerationOverride:
    """x-enumeration properties take the enumeration's Java type."""

    def test_ref_to_enumeration(self):
        spec = _spec()
        from_model(spec, "Color", spec["components"]["schemas"]["Color"], GeneratorConfig())
        prop = from_property(spec, "color", _ref("Color"))
        assert prop.data_type == "Color"
        assert prop.datatype_with_enum == "Color"
        assert not prop.is_primitive_type

    def test_string_constraints_cleared(self):
        spec = _spec()
        from_model(spec, "Color", spec["components"]["schemas"]["Color"], GeneratorConfig())
        prop = from_property(spec, "color", _ref("Color"))
        assert not prop.is_string
        assert prop.min_length is None
        assert prop.max_length is None

    def test_non_string_constraints_kept(self):
        spec = _spec()
        from_model(spec, "Level", spec["components"]["schemas"]["Level"], GeneratorConfig())
        prop = from_property(spec, "level", _ref("Level"))
        assert prop.data_type == "Level"
        assert prop.minimum == "1"

    def test_inline_enumeration_type(self):
        schema = {"type": "string", "x-enumeration": True, "x-enumeration-type": "Currency"}
        assert from_property(_spec(), "currency", schema).data_type == "Currency"

    def test_string_default_dropped(self):
        spec = _spec()
        spec["components"]["schemas"]["Color"]["default"] = "RED"
        from_model(spec, "Color", spec["components"]["schemas"]["Color"], GeneratorConfig())
        assert from_property(spec, "color", _ref("Color")).default_value == "null"

    def test_without_type_left_alone(self):
        assert from_property(_spec(), "color", {"type": "string", "x-enumeration": True}).data_type == "String"


class TestWrapperOverride:

    def test_ref_to_wrapper(self):
        prop = from_property(_spec(), "id", _ref("EmployeeId"))
        assert prop.data_type == "EmployeeId"
        assert prop.complex_type == "EmployeeId"

    def test_explicit_wrapper_type(self):
        spec = _spec()
        spec["components"]["schemas"]["EmployeeId"]["x-wrapper-type"] = "StaffId"
        assert from_property(spec, "id", _ref("EmployeeId")).data_type == "StaffId"

    def test_string_default_dropped(self):
        spec = _spec()
        spec["components"]["schemas"]["EmployeeId"]["default"] = "E-1"
        assert from_property(spec, "id", _ref("EmployeeId")).default_value == "null"


class TestDefaultValue:
    """Test the Java default literal for a schema."""

    def test_array_always_null(self):
        schema = {"type": "array", "items": {"type": "string"}, "default": ["a"]}
        assert to_default_value(schema) == "null"

    def test_missing(self):
        assert to_default_value({"type": "string"}) == "null"

    @pytest.mark.parametrize(
        "schema, literal",
        [
            ({"type": "string", "default": "abc"}, '"abc"'),
            ({"type": "string", "default": 'say "hi"'}, '"say \\"hi\\""'),
            ({"type": "integer", "default": 5}, "5"),
            ({"type": "integer", "format": "int64", "default": 5}, "5l"),
            ({"type": "number", "format": "float", "default": 1.5}, "1.5f"),
            ({"type": "number", "format": "double", "default": 1.5}, "1.5d"),
            ({"type": "number", "default": 2.5}, 'new BigDecimal("2.5")'),
            ({"type": "boolean", "default": False}, "false"),
            ({"type": "string", "format": "date", "default": "2020-01-01"}, "null"),
        ],
    )
    def test_literals(self, schema, literal):
        assert to_default_value(schema) == literal

    def test_property_default(self):
        assert from_property(_spec(), "active", {"type": "boolean", "default": True}).default_value == "true"


class TestFromModel:
    """Test component schema -> Model conversion."""

    def test_object(self):
        spec = _spec()
        model = from_model(spec, "Address", spec["components"]["schemas"]["Address"], GeneratorConfig())
        assert model.name == "Address"
        assert [v.name for v in model.vars] == ["street", "city"]
        assert [v.required for v in model.vars] == [False, True]
        assert not model.is_alias

    def test_single_ref_allof_is_parent(self):
        spec = _spec()
        model = from_model(spec, "Office", spec["components"]["schemas"]["Office"], GeneratorConfig())
        assert model.parent_name == "Address"
        assert [v.name for v in model.vars] == ["name"]
        assert model.vars[0].required

    def test_multi_ref_allof_merges(self):
        spec = _spec()
        model = from_model(spec, "Site", spec["components"]["schemas"]["Site"], GeneratorConfig())
        assert model.parent_name is None
        assert [v.name for v in model.vars] == ["street", "city", "lat"]

    def test_enumeration_type_stamped(self):
        spec = _spec()
        schema = spec["components"]["schemas"]["Color"]
        model = from_model(spec, "Color", schema, GeneratorConfig())
        assert schema["x-enumeration-type"] == "Color"
        assert model.vendor_extensions["x-enumeration-type"] == "Color"
        assert model.data_type == "String"

    def test_wrapper_type_stamped(self):
        spec = _spec()
        schema = spec["components"]["schemas"]["EmployeeId"]
        from_model(spec, "EmployeeId", schema, GeneratorConfig())
        assert schema["x-wrapper-type"] == "EmployeeId"

    def test_enum(self):
        spec = _spec()
        model = from_model(spec, "OfficeType", spec["components"]["schemas"]["OfficeType"], GeneratorConfig())
        assert model.is_enum
        assert model.allowable_values == ["HEAD", "BRANCH"]
        assert model.data_type == "String"

    def test_aliases(self):
        spec = _spec()
        schemas = spec["components"]["schemas"]
        nickname = from_model(spec, "Nickname", schemas["Nickname"], GeneratorConfig())
        names = from_model(spec, "Names", schemas["Names"], GeneratorConfig())
        counts = from_model(spec, "Counts", schemas["Counts"], GeneratorConfig())
        assert nickname.is_alias and nickname.data_type == "String"
        assert names.is_alias and names.data_type == "List<String>"
        assert counts.is_alias and counts.data_type == "Map<String, Integer>"

    def test_type_imports(self):
        schema = {
            "type": "object",
            "properties": {
                "born": {"type": "string", "format": "date"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "name": {"type": "string"},
            },
        }
        model = from_model(_spec(), "Person", schema, GeneratorConfig())
        assert model.imports == {"LocalDate", "List"}


class TestReorderSchemas:
    """x-enumerations move to the front, relative order kept."""

    def test_enumerations_first(self):
        schemas = {
            "A": {"type": "object"},
            "S": {"type": "string", "x-enumeration": True},
            "B": {"type": "object"},
            "T": {"type": "string", "x-enumeration": True},
        }
        assert list(reorder_schemas(schemas)) == ["S", "T", "A", "B"]

    def test_no_enumerations(self):
        schemas = {"B": {}, "A": {}}
        assert list(reorder_schemas(schemas)) == ["B", "A"]

    def test_values_kept(self):
        schema = {"type": "string", "x-enumeration": True}
        assert reorder_schemas({"S": schema})["S"] is schema

    def test_duplicate_name_raises(self):
        pairs = [("A", {}), ("S", {"x-enumeration": True}), ("A", {})]
        with pytest.raises(ConfigurationError):
            reorder_schemas(pairs)
