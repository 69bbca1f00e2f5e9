"""
Base generator interface for all declaration targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from enum import Flag
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .model import Model
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class GeneratorOutput(Flag):
    """Which declaration kinds a generator emits."""

    PROPERTIES = 1
    ENUMS = 2
    ALL = PROPERTIES | ENUMS


class CodeGenerator(ABC):
    """Abstract base class for all declaration generators."""

    def __init__(self):
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        self._template_engine = create_template_engine(template_dir)
        for name, content in self.get_builtin_templates().items():
            if not self._template_engine.template_exists(name):
                self._template_engine.add_template(name, content)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.d.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    def get_builtin_templates(self) -> Dict[str, str]:
        """In-memory templates registered when no template file overrides them."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, model: Model, output: GeneratorOutput = GeneratorOutput.ALL) -> str:
        """
        Generate declarations for a model.

        Args:
            model: Model to generate declarations for
            output: Declaration kinds to emit

        Returns:
            Generated code as a string
        """
        pass

    def validate_model(self, model: Model) -> List[str]:
        """
        Validate a model for basic structural issues.

        Args:
            model: Model to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for module in model.modules:
            for entry in module.classes:
                if not entry.properties:
                    warnings.append(f"Class '{module.name}.{entry.name}' has no properties")
            for entry in module.enums:
                if not entry.members:
                    warnings.append(f"Enum '{module.name}.{entry.name}' has no members")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Allow max 1 consecutive blank line
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    model: Model,
    output: GeneratorOutput = GeneratorOutput.ALL,
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        model: Model to generate declarations for
        output: Declaration kinds to emit

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_model(model)
        for warning in warnings:
            logger.warning(warning)

        code = generator.generate(model, output)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "module_count": len(model.modules),
            "class_count": model.class_count,
            "enum_count": model.enum_count,
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
