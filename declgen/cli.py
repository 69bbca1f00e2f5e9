"""
Command-line interface for declgen.

Loads a JSON configuration, runs the declaration pipeline and reports the
outcome with rich console output.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen.core.config import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    ConfigManager,
    EnumStyle,
    GeneratorConfig,
    get_manifest_paths,
)
from .discovery import DiscoveryError, ManifestError
from .logging_config import configure_logging, get_logger
from .pipeline import DeclarationPipeline

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_UNEXPECTED = 3

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="declgen",
        description="Generate TypeScript ambient declarations from type manifests",
    )

    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_FILE,
        help=f"JSON configuration file (default: {DEFAULT_CONFIG_FILE})",
    )

    parser.add_argument(
        "--base-directory",
        "-b",
        metavar="DIR",
        help="Directory used to resolve the configuration file and manifests",
    )

    parser.add_argument(
        "--output-namespace",
        metavar="NAME",
        help="Emit every type into a single namespace with this name",
    )

    parser.add_argument(
        "--enum-style",
        choices=[style.value for style in EnumStyle],
        help="How enums are rendered",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the declarations instead of writing the output file",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug output"
    )
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Only show warnings and errors"
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _resolve_config_path(args: argparse.Namespace) -> Path:
    path = Path(args.config)
    if not path.is_absolute() and args.base_directory:
        path = Path(args.base_directory) / path
    return path


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Load the configuration file and apply CLI overrides."""
    manager = ConfigManager()
    config = manager.load(_resolve_config_path(args))

    if args.base_directory:
        config.base_directory = args.base_directory
    if args.output_namespace:
        config.output_namespace = args.output_namespace
    if args.enum_style:
        config.enum_style = EnumStyle.parse(args.enum_style)

    return config


def _print_summary(
    config: GeneratorConfig, output_file: Optional[Path], warnings: List[str]
):
    table = Table(title="Declaration Generation", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="green")

    table.add_row("Manifests", ", ".join(get_manifest_paths(config)))
    table.add_row("Namespaces", ", ".join(rule.namespace for rule in config.namespaces))
    table.add_row("Enum Style", config.enum_style.value)
    if config.output_namespace:
        table.add_row("Output Namespace", config.output_namespace)
    table.add_row("Output File", str(output_file) if output_file else "-")

    console.print(table)
    for warning in warnings:
        console.print(f"[yellow]⚠️  {warning}[/yellow]")


def _print_code(code: str):
    """Highlight declarations on a terminal; write them verbatim otherwise."""
    if sys.stdout.isatty():
        console.print(
            Syntax(code, "typescript", theme="monokai", word_wrap=True), crop=False
        )
    else:
        sys.stdout.write(code + "\n")
        sys.stdout.flush()


def run(args: argparse.Namespace) -> int:
    """
    Run declaration generation for parsed arguments.

    Returns:
        Process exit code
    """
    try:
        config = _build_config(args)
        pipeline = DeclarationPipeline(config)

        if args.stdout:
            code = pipeline.render()
            if code:
                _print_code(code)
            return EXIT_OK

        output_file = pipeline.run()
        if not args.quiet:
            _print_summary(config, output_file, pipeline.warnings)
        if output_file:
            console.print(f"[green]✓ Declarations written to[/green] {output_file}")
        else:
            console.print("[yellow]⚠️  No types matched; nothing was written[/yellow]")
        return EXIT_OK

    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("File not found", exc_info=True)
        return EXIT_NOT_FOUND
    except (ConfigError, DiscoveryError, ManifestError) as e:
        console.print(f"[red]✗ Configuration error:[/red] {e}")
        logger.debug("Configuration error", exc_info=True)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        logger.error("Unexpected error", exc_info=True)
        return EXIT_UNEXPECTED


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
