"""
Unit tests for the model builder.
"""

import pytest

from declgen.codegen.core.model import DEFAULT_MODULE_NAME, ModelBuilder, SymbolError
from declgen.codegen.core.symbols import MemberSymbol, PrimitiveKind, TypeRef

STRING = TypeRef.of_primitive(PrimitiveKind.STRING)
INT = TypeRef.of_primitive(PrimitiveKind.INT)


class TestModelBuilderAdd:
    """Test symbol collection."""

    def test_add_none_raises(self):
        with pytest.raises(SymbolError, match="null type symbol"):
            ModelBuilder().add(None)

    def test_add_is_idempotent(self, user_symbol):
        builder = ModelBuilder().add(user_symbol).add(user_symbol)
        assert len(builder) == 1
        assert len(builder.build().modules[0].classes) == 1

    def test_equal_symbols_collapse(self, make_class):
        """Separately parsed descriptions of the same type count once."""
        first = make_class("User", members=[("Name", STRING)])
        second = make_class("User", members=[("Name", STRING)])
        assert first is not second
        assert len(ModelBuilder().add(first).add(second)) == 1

    def test_arity_mismatch_raises(self, make_class):
        """A generic marker must agree with the declared parameter names."""
        symbol = make_class("Pair`2", generic_parameters=("T",))
        with pytest.raises(SymbolError, match="arity 2"):
            ModelBuilder().add(symbol)


class TestModelBuilderBuild:
    """Test model construction."""

    def test_groups_by_namespace_in_first_seen_order(self, make_class):
        model = (
            ModelBuilder()
            .add(make_class("B", namespace="Second"))
            .add(make_class("A", namespace="First"))
            .add(make_class("C", namespace="Second"))
            .build()
        )
        assert [m.name for m in model.modules] == ["Second", "First"]
        assert [c.name for c in model.get_module("Second").classes] == ["B", "C"]

    def test_missing_namespace_defaults_to_global(self, make_class):
        model = ModelBuilder().add(make_class("Loose", namespace=None)).build()
        assert model.modules[0].name == DEFAULT_MODULE_NAME == "Global"

    def test_enums_and_classes_separated(self, user_symbol, status_symbol):
        model = ModelBuilder().add(status_symbol).add(user_symbol).build()
        module = model.modules[0]
        assert [c.name for c in module.classes] == ["User"]
        assert [e.name for e in module.enums] == ["Status"]
        assert [e.name for e in module.members] == ["User", "Status"]

    def test_enum_values_keep_declaration_order(self, make_enum):
        symbol = make_enum("Priority", [("High", 3), ("Low", 1), ("Medium", 2)])
        entry = ModelBuilder().add(symbol).build().modules[0].enums[0]
        assert [(m.name, m.value) for m in entry.members] == [
            ("High", 3),
            ("Low", 1),
            ("Medium", 2),
        ]

    def test_generic_definition_strips_arity(self, make_class):
        symbol = make_class(
            "Page`2",
            generic_parameters=("TKey", "TValue"),
            members=[("Key", TypeRef.parameter("TKey"))],
        )
        entry = ModelBuilder().add(symbol).build().modules[0].classes[0]
        assert entry.name == "Page"
        assert entry.type_parameters == ("TKey", "TValue")

    def test_only_public_instance_members_collected(self, make_class):
        """Static, non-public and indexer members are skipped; order is kept."""
        symbol = make_class(
            "Bag",
            members=[
                MemberSymbol("Zeta", STRING),
                MemberSymbol("Secret", STRING, is_public=False),
                MemberSymbol("Shared", STRING, is_static=True),
                MemberSymbol("Item", INT, is_indexer=True),
                MemberSymbol("Alpha", INT, member_kind="field"),
            ],
        )
        entry = ModelBuilder().add(symbol).build().modules[0].classes[0]
        assert [p.name for p in entry.properties] == ["Zeta", "Alpha"]

    def test_member_types_kept_structural(self, user_symbol):
        """Property types are not mapped at build time."""
        entry = ModelBuilder().add(user_symbol).build().modules[0].classes[0]
        assert entry.properties[0].type == STRING

    def test_model_counts(self, user_symbol, status_symbol, build_model):
        model = build_model(user_symbol, status_symbol)
        assert len(model) == 1
        assert model.class_count == 1
        assert model.enum_count == 1
