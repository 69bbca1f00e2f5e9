"""
Configuration management for declaration generation.

Handles loading JSON configuration files, normalising keys, applying
defaults and validating generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger
from .naming import to_camel_case, to_snake_case

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "declgen.json"
DEFAULT_OUTPUT_FILE_NAME = "models.gen.ts"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class EnumStyle(Enum):
    """How enum declarations are rendered."""

    NUMERIC = "numeric"  # Name = 1
    STRING = "string"  # Name = "Name"
    STRING_LITERAL = "string_literal"  # type X = "A" | "B"

    @classmethod
    def parse(cls, value: Union[str, "EnumStyle"]) -> "EnumStyle":
        if isinstance(value, cls):
            return value
        key = _normalise_key(str(value))
        for style in cls:
            if _normalise_key(style.value) == key:
                return style
        valid = ", ".join(s.value for s in cls)
        raise ConfigError(f"Invalid enumStyle '{value}'. Expected one of: {valid}")


@dataclass
class NamespaceRule:
    """Selection rule for one source namespace."""

    namespace: str
    include_types: List[str] = field(default_factory=list)
    exclude_types: List[str] = field(default_factory=list)
    include_generic_types: List[str] = field(default_factory=list)
    exclude_generic_types: List[str] = field(default_factory=list)
    include_nested: bool = False


@dataclass
class GeneratorConfig:
    """Configuration for a declaration generation run."""

    # Type sources
    manifest: Optional[str] = None
    manifests: Optional[List[str]] = None

    # Output settings
    output_path: str = ""
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME
    output_namespace: Optional[str] = None
    base_directory: Optional[str] = None

    # Type selection
    include_static_classes: bool = False
    namespaces: List[NamespaceRule] = field(default_factory=list)

    # Rendering
    enum_style: EnumStyle = EnumStyle.NUMERIC
    hidden_type_marker: str = "Guid"
    indent_size: int = 4
    use_tabs: bool = False

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


def _normalise_key(key: str) -> str:
    return to_snake_case(key).replace("_", "")


def _match_keys(data: Dict[str, Any], target_fields: List[str]) -> Dict[str, Any]:
    """Map case-insensitive camelCase/snake_case keys onto dataclass field names."""
    lookup = {_normalise_key(name): name for name in target_fields}
    matched = {}
    for key, value in data.items():
        name = lookup.get(_normalise_key(str(key)))
        if name is None:
            logger.debug(f"Ignoring unknown configuration key: {key}")
            continue
        matched[name] = value
    return matched


class ConfigManager:
    """Loads, validates and saves generator configuration."""

    def load(self, config_path: Union[str, Path]) -> GeneratorConfig:
        """
        Load and validate configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Validated GeneratorConfig

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is malformed or fails validation
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        logger.info(f"Loading configuration from {path}")
        data = self._load_config_file(path)
        config = self.from_dict(data)
        self.validate_config(config)
        return config

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return data

    def from_dict(self, data: Dict[str, Any]) -> GeneratorConfig:
        """Build a GeneratorConfig from a raw (camelCase or snake_case) dictionary."""
        config_fields = [f.name for f in fields(GeneratorConfig)]
        config_args = _match_keys(data, config_fields)

        raw_rules = config_args.pop("namespaces", None) or []
        if not isinstance(raw_rules, list):
            raise ConfigError("'namespaces' must be a list")
        config_args["namespaces"] = [self._rule_from_dict(r) for r in raw_rules]

        if "enum_style" in config_args:
            config_args["enum_style"] = EnumStyle.parse(config_args["enum_style"])

        if config_args.get("output_file_name") is None:
            config_args.pop("output_file_name", None)

        return GeneratorConfig(**config_args)

    def _rule_from_dict(self, data: Any) -> NamespaceRule:
        if isinstance(data, str):
            return NamespaceRule(namespace=data)
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid namespace entry: {data!r}")

        rule_args = _match_keys(data, [f.name for f in fields(NamespaceRule)])
        rule_args.setdefault("namespace", "")
        for key in (
            "include_types",
            "exclude_types",
            "include_generic_types",
            "exclude_generic_types",
        ):
            if rule_args.get(key) is None:
                rule_args[key] = []
        return NamespaceRule(**rule_args)

    def validate_config(self, config: GeneratorConfig) -> None:
        """
        Validate a configuration.

        Raises:
            ConfigError: On the first validation failure
        """
        has_manifest = bool(config.manifest and config.manifest.strip())
        has_manifests = bool(config.manifests)

        if not has_manifest and not has_manifests:
            raise ConfigError(
                "Either 'manifest' or 'manifests' must be specified in configuration."
            )

        if has_manifest and has_manifests:
            raise ConfigError("Cannot specify both 'manifest' and 'manifests'")

        if has_manifests and any(not (m or "").strip() for m in config.manifests):
            raise ConfigError("Manifest name in 'manifests' array cannot be empty")

        if not (config.output_path or "").strip():
            raise ConfigError("'outputPath' must be specified")

        if not (config.output_file_name or "").strip():
            raise ConfigError("'outputFileName' must be specified")

        if not config.namespaces:
            raise ConfigError("At least one namespace must be specified")

        for rule in config.namespaces:
            if not (rule.namespace or "").strip():
                raise ConfigError("Namespace name cannot be empty")

        if config.indent_size < 0:
            raise ConfigError("'indentSize' cannot be negative")

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to a JSON file using camelCase keys."""
        path = Path(output_path)

        config_dict: Dict[str, Any] = {}
        for f in fields(GeneratorConfig):
            value = getattr(config, f.name)
            if value is None:
                continue
            if f.name == "enum_style":
                value = value.value
            elif f.name == "namespaces":
                value = [
                    {to_camel_case(k): v for k, v in vars(rule).items()}
                    for rule in value
                ]
            config_dict[to_camel_case(f.name)] = value

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e


def get_manifest_paths(config: GeneratorConfig) -> List[str]:
    """Return the configured manifest locations, preferring ``manifests``."""
    if config.manifests:
        return list(config.manifests)
    if config.manifest:
        return [config.manifest]
    return []


def load_config(config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        config_file: Path to JSON configuration file (defaults to declgen.json
            in the current directory)

    Returns:
        Validated configuration
    """
    path = Path(config_file) if config_file else Path.cwd() / DEFAULT_CONFIG_FILE
    return ConfigManager().load(path)

