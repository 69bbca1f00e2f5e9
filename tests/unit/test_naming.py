"""
Unit tests for naming policy.
"""

import pytest

from declgen.codegen.core.model import ClassEntry, EnumEntry, Module, PropertyEntry
from declgen.codegen.core.naming import (
    ModuleNameFormatter,
    TypeFormatter,
    format_module_name,
    format_property_name,
    has_interface_prefix,
    interface_name,
    is_generic_type_parameter,
    prefix_interfaces,
    to_camel_case,
    to_snake_case,
)
from declgen.codegen.core.symbols import PrimitiveKind, TypeRef

INT = TypeRef.of_primitive(PrimitiveKind.INT)


def prop(name="Value", type_ref=INT):
    return PropertyEntry(name, type_ref)


class TestPropertyNames:
    """Test property name formatting."""

    @pytest.mark.parametrize(
        "name,expected",
        [("FirstName", "firstName"), ("ID", "iD"), ("value", "value"), ("X", "x")],
    )
    def test_lowercases_first_character_only(self, name, expected):
        assert format_property_name(prop(name)) == expected

    def test_empty_name(self):
        assert format_property_name(prop("")) == ""


class TestInterfacePrefix:
    """Test the I prefix heuristics."""

    def test_prefix_added(self):
        assert interface_name("User") == "IUser"

    def test_prefix_idempotent(self):
        """Prefixing IUser again never yields IIUser."""
        assert interface_name("IUser") == "IUser"
        assert interface_name(interface_name("User")) == "IUser"

    def test_lowercase_after_i_is_not_a_prefix(self):
        assert interface_name("Item") == "IItem"
        assert not has_interface_prefix("Item")

    @pytest.mark.parametrize("name", ["T", "TKey", "TValue", "TModel"])
    def test_generic_parameter_names_unchanged(self, name):
        assert is_generic_type_parameter(name)
        assert interface_name(name) == name

    @pytest.mark.parametrize("name", ["Task", "Ticket", "TResultX"])
    def test_non_parameter_t_names_prefixed(self, name):
        assert not is_generic_type_parameter(name)
        assert interface_name(name) == "I" + name


class TestModuleNames:
    """Test module name resolution and the prefixing projection."""

    @pytest.fixture
    def module(self):
        return Module(
            name="MyApp.Models",
            classes=(ClassEntry("User"), ClassEntry("IRepository")),
            enums=(EnumEntry("Status"),),
        )

    def test_source_namespace_kept_without_override(self, module):
        name, _ = format_module_name(module)
        assert name == "MyApp.Models"

    def test_override_applies(self, module):
        name, _ = format_module_name(module, "Api")
        assert name == "Api"

    def test_empty_override_ignored(self, module):
        assert ModuleNameFormatter("")(module)[0] == "MyApp.Models"

    def test_projection_prefixes_classes_only(self, module):
        projected = prefix_interfaces(module)
        assert [c.name for c in projected.classes] == ["IUser", "IRepository"]
        assert [e.name for e in projected.enums] == ["Status"]

    def test_projection_leaves_source_untouched(self, module):
        prefix_interfaces(module)
        assert module.classes[0].name == "User"

    def test_repeated_projection_is_stable(self, module):
        twice = prefix_interfaces(prefix_interfaces(module))
        assert [c.name for c in twice.classes] == ["IUser", "IRepository"]


class TestMemberTypeFormatter:
    """Test final member type normalisation."""

    @pytest.mark.parametrize(
        "text", ["Guid", "guid", "GUID", "System.Guid", "IGuid", "System.IGuid", "Ids.iguid"]
    )
    def test_guid_names_become_string(self, text):
        assert TypeFormatter.format_member_type(prop(), text) == "string"

    @pytest.mark.parametrize("text", ["System.DateTime", "System.DateTimeOffset"])
    def test_host_dates_become_date(self, text):
        assert TypeFormatter.format_member_type(prop(), text) == "Date"

    def test_nullable_adds_null_union(self):
        nullable = prop(type_ref=TypeRef.nullable_of(INT))
        assert TypeFormatter()(nullable, "number") == "number | null"

    def test_plain_type_unchanged(self):
        assert TypeFormatter()(prop(), "number") == "number"


class TestCaseConversion:
    def test_snake_case(self):
        assert to_snake_case("outputFileName") == "output_file_name"
        assert to_snake_case("HTTPServer") == "http_server"

    def test_camel_case(self):
        assert to_camel_case("include_generic_types") == "includeGenericTypes"
