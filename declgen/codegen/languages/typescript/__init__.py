"""
TypeScript declaration generator.

Provides TypeScript ambient namespace declarations from the declaration model.
"""

from .generator import TypeScriptGenerator
from .types import EmissionContext, TypeScriptTypeMapper

__all__ = ["TypeScriptGenerator", "TypeScriptTypeMapper", "EmissionContext"]


def create_generator(config=None) -> TypeScriptGenerator:
    """Create a TypeScript generator from a GeneratorConfig (or defaults)."""
    if config is None:
        return TypeScriptGenerator()

    return TypeScriptGenerator(
        enum_style=config.enum_style,
        indent=config.indent,
        output_namespace=config.output_namespace,
        hidden_type_marker=config.hidden_type_marker,
    )
