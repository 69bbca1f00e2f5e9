"""
Pytest configuration and shared fixtures for the declgen test suite.
"""

import json
import logging
from pathlib import Path

import pytest

from declgen.codegen.core.config import NamespaceRule
from declgen.codegen.core.model import ModelBuilder
from declgen.codegen.core.symbols import (
    EnumValueSymbol,
    MemberSymbol,
    PrimitiveKind,
    SymbolKind,
    TypeRef,
    TypeSymbol,
)
from declgen.codegen.languages.typescript import TypeScriptGenerator


STRING = TypeRef.of_primitive(PrimitiveKind.STRING)
INT = TypeRef.of_primitive(PrimitiveKind.INT)
BOOL = TypeRef.of_primitive(PrimitiveKind.BOOL)


@pytest.fixture
def make_class():
    """Factory for class symbols. Members are (name, TypeRef) pairs."""

    def _make(name, namespace="MyApp.Models", members=(), **kwargs):
        return TypeSymbol(
            name=name,
            namespace=namespace,
            kind=kwargs.pop("kind", SymbolKind.CLASS),
            members=tuple(
                m if isinstance(m, MemberSymbol) else MemberSymbol(m[0], m[1])
                for m in members
            ),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_enum():
    """Factory for enum symbols. Values are names (numbered from 0) or (name, value) pairs."""

    def _make(name, values, namespace="MyApp.Models", **kwargs):
        enum_values = []
        for index, value in enumerate(values):
            if isinstance(value, str):
                enum_values.append(EnumValueSymbol(value, index))
            else:
                enum_values.append(EnumValueSymbol(*value))
        return TypeSymbol(
            name=name,
            namespace=namespace,
            kind=SymbolKind.ENUM,
            enum_values=tuple(enum_values),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_rule():
    def _make(namespace="MyApp.Models", **kwargs):
        return NamespaceRule(namespace=namespace, **kwargs)

    return _make


@pytest.fixture
def user_symbol(make_class):
    return make_class("User", members=[("Name", STRING), ("Age", INT), ("IsActive", BOOL)])


@pytest.fixture
def status_symbol(make_enum):
    return make_enum("Status", [("Active", 1), ("Inactive", 2)])


@pytest.fixture
def build_model():
    """Build a model from symbols."""

    def _build(*symbols):
        return ModelBuilder().add_all(symbols).build()

    return _build


@pytest.fixture
def generator():
    return TypeScriptGenerator()


@pytest.fixture
def sample_manifest():
    """A small manifest covering classes, generics, enums and hidden types."""
    return {
        "types": [
            {
                "name": "User",
                "namespace": "MyApp.Models",
                "kind": "class",
                "members": [
                    {"name": "Id", "type": "guid"},
                    {"name": "Name", "type": "string"},
                    {"name": "Status", "type": {"enum": "Status", "namespace": "MyApp.Models"}},
                    {"name": "Tags", "type": {"list": "string"}},
                    {"name": "LastLogin", "type": {"nullable": "datetime"}},
                ],
            },
            {
                "name": "Result`1",
                "namespace": "MyApp.Models",
                "kind": "class",
                "genericParameters": ["T"],
                "members": [
                    {"name": "Value", "type": {"parameter": "T"}},
                    {"name": "Errors", "type": {"array": "string"}},
                ],
            },
            {
                "name": "Status",
                "namespace": "MyApp.Models",
                "kind": "enum",
                "values": [{"name": "Active", "value": 1}, {"name": "Inactive", "value": 2}],
            },
            {
                "name": "GuidHolder",
                "namespace": "MyApp.Models",
                "kind": "class",
                "members": [{"name": "Value", "type": "guid"}],
            },
            {
                "name": "Helpers",
                "namespace": "MyApp.Models",
                "kind": "class",
                "isStatic": True,
            },
            {
                "name": "Order",
                "namespace": "MyApp.Models.Sales",
                "kind": "class",
                "members": [
                    {"name": "Customer", "type": {"class": "User", "namespace": "MyApp.Models"}}
                ],
            },
            {
                "name": "Internal",
                "namespace": "Other",
                "kind": "class",
            },
        ]
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""

    def _write(name, data) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project_dir(tmp_path, write_json, sample_manifest):
    """A project directory with a manifest and a configuration file."""
    write_json("types.json", sample_manifest)
    write_json(
        "declgen.json",
        {
            "manifest": "types.json",
            "outputPath": str(tmp_path / "generated"),
            "namespaces": [{"namespace": "MyApp.Models", "includeNested": True}],
        },
    )
    return tmp_path


@pytest.fixture(autouse=True)
def reset_declgen_logging():
    """Undo CLI logging configuration between tests."""
    logger = logging.getLogger("declgen")
    handlers = list(logger.handlers)
    yield
    logger.handlers = handlers
    logger.setLevel(logging.NOTSET)
