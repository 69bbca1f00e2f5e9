"""
declgen: TypeScript ambient declarations from object-oriented type descriptors.

Builds a declaration model from type symbols (read from JSON type manifests)
and renders it as ``declare namespace`` blocks.
"""

__version__ = "0.1.0"

from .codegen import generate_declarations
from .codegen.core import (
    GeneratorConfig,
    ModelBuilder,
    TypeRef,
    TypeSymbol,
    load_config,
)
from .codegen.languages.typescript import TypeScriptGenerator
from .pipeline import DeclarationPipeline

__all__ = [
    "__version__",
    "DeclarationPipeline",
    "GeneratorConfig",
    "ModelBuilder",
    "TypeRef",
    "TypeScriptGenerator",
    "TypeSymbol",
    "generate_declarations",
    "load_config",
]
