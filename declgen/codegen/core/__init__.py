"""
Core declaration generation components.

Provides the symbol and model types, filters, naming policy and base
classes used by all language generators.
"""

from .symbols import (
    EnumValueSymbol,
    MemberSymbol,
    PrimitiveKind,
    SymbolKind,
    TypeKind,
    TypeRef,
    TypeSymbol,
)
from .model import (
    ClassEntry,
    EnumEntry,
    EnumMember,
    Model,
    ModelBuilder,
    Module,
    PropertyEntry,
    SymbolError,
)
from .config import (
    ConfigError,
    ConfigManager,
    EnumStyle,
    GeneratorConfig,
    NamespaceRule,
    get_manifest_paths,
    load_config,
)
from .filters import TypeFilter, VisibilityFilter
from .naming import (
    TypeFormatter,
    format_module_name,
    format_property_name,
    interface_name,
    prefix_interfaces,
)
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    GeneratorOutput,
    generate_code,
)
from .postprocess import CodePostProcessor
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Symbols
    "EnumValueSymbol",
    "MemberSymbol",
    "PrimitiveKind",
    "SymbolKind",
    "TypeKind",
    "TypeRef",
    "TypeSymbol",
    # Model
    "ClassEntry",
    "EnumEntry",
    "EnumMember",
    "Model",
    "ModelBuilder",
    "Module",
    "PropertyEntry",
    "SymbolError",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "EnumStyle",
    "GeneratorConfig",
    "NamespaceRule",
    "get_manifest_paths",
    "load_config",
    # Filters and naming
    "TypeFilter",
    "VisibilityFilter",
    "TypeFormatter",
    "format_module_name",
    "format_property_name",
    "interface_name",
    "prefix_interfaces",
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "GeneratorOutput",
    "generate_code",
    "CodePostProcessor",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
