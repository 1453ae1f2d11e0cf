"""
Configuration for issuelens.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (issuelens.toml)
3. Default values (lowest priority)

Environment variables:
- ISSUELENS_CONFIG_FILE: Path to TOML config file
- ISSUELENS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- ISSUELENS_STRUCTURED_LOGGING: JSON log lines (true/false)
- ISSUELENS_MAX_DEPTH: Nesting bound for tree annotation
- ISSUELENS_SEVERITY_FILTER: Default issue list filter (all, error, warning, info)
- ISSUELENS_VALIDATION_MODE: Mode passed to the validator (tolerant, strict)
- ISSUELENS_VALIDATOR: Validator reference ("package.module:function")
- ISSUELENS_CONVERTER: Converter reference ("package.module:function")
"""

import os
import logging
from dataclasses import dataclass, field
from importlib.metadata import version as get_package_version, PackageNotFoundError
from pathlib import Path
from typing import Optional, Dict, Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from issuelens.core.annotate import DEFAULT_MAX_DEPTH
from issuelens.core.collaborators import VALIDATION_MODES
from issuelens.core.logging_config import configure_logging
from issuelens.core.presentation import ALL, parse_severity_filter


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILES = ("issuelens.toml", ".issuelens.toml")


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("issuelens")
    except PackageNotFoundError:
        return "0.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _parse_max_depth(value: Any, fallback: int) -> int:
    try:
        depth = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid max_depth %r. Keeping %d.", value, fallback)
        return fallback
    if depth < 0:
        logger.warning("max_depth must be >= 0, got %d. Keeping %d.", depth, fallback)
        return fallback
    return depth


def _normalize_severity_filter(value: Any, fallback: str) -> str:
    try:
        selected = parse_severity_filter(str(value))
    except ValueError:
        logger.warning(
            "Invalid severity filter '%s'. Keeping '%s'. Valid options: all, error, warning, info",
            value,
            fallback,
        )
        return fallback
    return selected if selected == ALL else selected.value


def _normalize_validation_mode(value: Any, fallback: str) -> str:
    normalized = str(value).strip().lower()
    if normalized not in VALIDATION_MODES:
        logger.warning(
            "Invalid validation mode '%s'. Keeping '%s'. Valid options: %s",
            value,
            fallback,
            ", ".join(VALIDATION_MODES),
        )
        return fallback
    return normalized


@dataclass
class AnnotationConfig:
    """Settings for tree annotation and issue listing.

    Attributes:
        max_depth: Containers nested this deep are not descended
        severity_filter: Default issue list filter ("all" or a severity)
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    severity_filter: str = ALL

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "AnnotationConfig":
        """Create config from TOML dict (typically [annotation] section)."""
        defaults = cls()
        return cls(
            max_depth=_parse_max_depth(data.get("max_depth", defaults.max_depth), defaults.max_depth),
            severity_filter=_normalize_severity_filter(
                data.get("severity_filter", defaults.severity_filter),
                defaults.severity_filter,
            ),
        )


@dataclass
class ValidationConfig:
    """Settings for the external validator and converter.

    Attributes:
        mode: Mode passed to the validator ("tolerant" or "strict")
        validator: Optional "module:function" reference to the validator
        converter: Optional "module:function" reference to the converter
    """

    mode: str = "tolerant"
    validator: Optional[str] = None
    converter: Optional[str] = None

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "ValidationConfig":
        """Create config from TOML dict (typically [validation] section)."""
        return cls(
            mode=_normalize_validation_mode(data.get("mode", "tolerant"), "tolerant"),
            validator=data.get("validator") or None,
            converter=data.get("converter") or None,
        )


@dataclass
class ServerConfig:
    """Configuration with support for env vars and TOML overrides."""

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "issuelens"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Annotation configuration
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)

    # External collaborator configuration
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("ISSUELENS_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in DEFAULT_CONFIG_FILES:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            return

        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = str(log["level"]).upper()
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

        if "server" in data:
            srv = data["server"]
            if "name" in srv:
                self.server_name = srv["name"]
            if "version" in srv:
                self.server_version = srv["version"]

        if "annotation" in data:
            self.annotation = AnnotationConfig.from_toml_dict(data["annotation"])

        if "validation" in data:
            self.validation = ValidationConfig.from_toml_dict(data["validation"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if level := os.environ.get("ISSUELENS_LOG_LEVEL"):
            self.log_level = level.upper()

        if structured := os.environ.get("ISSUELENS_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

        if max_depth := os.environ.get("ISSUELENS_MAX_DEPTH"):
            self.annotation.max_depth = _parse_max_depth(max_depth, self.annotation.max_depth)

        if severity := os.environ.get("ISSUELENS_SEVERITY_FILTER"):
            self.annotation.severity_filter = _normalize_severity_filter(
                severity, self.annotation.severity_filter
            )

        if mode := os.environ.get("ISSUELENS_VALIDATION_MODE"):
            self.validation.mode = _normalize_validation_mode(mode, self.validation.mode)

        if validator := os.environ.get("ISSUELENS_VALIDATOR"):
            self.validation.validator = validator

        if converter := os.environ.get("ISSUELENS_CONVERTER"):
            self.validation.converter = converter

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(
            level=self.log_level,
            format="structured" if self.structured_logging else "human",
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
