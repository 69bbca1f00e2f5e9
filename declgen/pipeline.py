"""Declaration generation pipeline.

Ties configuration, type discovery, model building, generation and
post-processing together, and writes the resulting declarations file.
"""

from pathlib import Path
from typing import List, Optional

from .codegen.core.config import GeneratorConfig
from .codegen.core.generator import GeneratorError, GeneratorOutput, generate_code
from .codegen.core.model import Model, ModelBuilder
from .codegen.core.postprocess import CodePostProcessor
from .codegen.core.symbols import TypeSymbol
from .codegen.languages.typescript import create_generator
from .discovery import TypeDiscovery
from .logging_config import get_logger
from .utils import resolve_output_path

logger = get_logger(__name__)


class DeclarationPipeline:
    """Runs one declaration generation from a validated configuration."""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.discovery = TypeDiscovery(config)
        self.generator = create_generator(config)
        self.post_processor = CodePostProcessor(config.hidden_type_marker)
        self.warnings: List[str] = []

    def discover(self) -> List[TypeSymbol]:
        """Load the configured manifests and select matching types."""
        symbols = self.discovery.load_manifests()
        selected = self.discovery.discover(symbols)
        logger.info(f"Discovered {len(selected)} type(s) to export")
        return selected

    def build_model(self, symbols: List[TypeSymbol]) -> Model:
        model = ModelBuilder().add_all(symbols).build()
        logger.info(
            f"Built model: {len(model)} namespace(s), "
            f"{model.class_count} interface(s), {model.enum_count} enum(s)"
        )
        return model

    def render(self, symbols: Optional[List[TypeSymbol]] = None) -> str:
        """
        Produce the final declarations text.

        Args:
            symbols: Pre-discovered symbols (discovered from manifests when omitted)

        Returns:
            Post-processed declarations, or an empty string when nothing matched

        Raises:
            GeneratorError: If generation fails
        """
        if symbols is None:
            symbols = self.discover()

        if not symbols:
            logger.warning("No types matched the configured namespaces")
            return ""

        model = self.build_model(symbols)
        result = generate_code(self.generator, model, GeneratorOutput.ALL)
        if not result.success:
            raise GeneratorError(result.error_message) from result.exception

        self.warnings = result.warnings
        return self.post_processor.process(result.code)

    def run(self) -> Optional[Path]:
        """
        Generate declarations and write them to the configured output file.

        Returns:
            Path of the written file, or None when no types matched
        """
        code = self.render()
        if not code:
            logger.warning("Nothing to write")
            return None

        output_file = resolve_output_path(
            self.config.output_path, self.config.output_file_name
        )
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(code + "\n", encoding="utf-8")

        logger.info(f"Declarations written to {output_file}")
        return output_file
