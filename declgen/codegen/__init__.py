"""
declgen code generation module.

Builds a declaration model from type symbols and renders it as TypeScript
ambient declarations.
"""

from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.model import Model, ModelBuilder
from .core.postprocess import process
from .languages.typescript import TypeScriptGenerator, create_generator


def generate_declarations(symbols, config=None) -> GenerationResult:
    """
    Build a model from type symbols and generate post-processed declarations.

    Args:
        symbols: Iterable of TypeSymbol
        config: Optional GeneratorConfig controlling rendering

    Returns:
        GenerationResult with the final declarations text
    """
    model = ModelBuilder().add_all(symbols).build()
    generator = create_generator(config)
    result = generate_code(generator, model)
    if result.success:
        marker = config.hidden_type_marker if config else "Guid"
        result.code = process(result.code, marker)
    return result


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "Model",
    "ModelBuilder",
    "TypeScriptGenerator",
    "generate_code",
    "generate_declarations",
]
