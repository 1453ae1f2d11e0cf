"""CLI configuration.

Resolves the effective settings for a command from command-line options
layered over the shared issuelens.config module.
"""

from typing import Optional

from issuelens.config import ServerConfig, get_config as get_server_config


class CLIContext:
    """CLI execution context with resolved configuration.

    Holds the effective configuration for a CLI command, including
    any overrides from command-line options.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        server_config: Optional[ServerConfig] = None,
    ):
        """Initialize CLI context.

        Args:
            config_file: Explicit TOML config path from --config-file.
            server_config: Optional config (uses global if not provided).
        """
        if server_config is not None:
            self._config = server_config
        elif config_file:
            self._config = ServerConfig.from_env(config_file)
        else:
            self._config = get_server_config()

    @property
    def config(self) -> ServerConfig:
        """Get the underlying configuration."""
        return self._config

    def max_depth(self, override: Optional[int] = None) -> int:
        """Annotation depth bound: --max-depth first, then config."""
        if override is not None:
            return override
        return self._config.annotation.max_depth

    def severity_filter(self, override: Optional[str] = None) -> str:
        """Issue list filter: --severity first, then config."""
        if override is not None:
            return override
        return self._config.annotation.severity_filter

    def validation_mode(self, override: Optional[str] = None) -> str:
        if override is not None:
            return override
        return self._config.validation.mode

    def validator_ref(self, override: Optional[str] = None) -> Optional[str]:
        return override or self._config.validation.validator

    def converter_ref(self, override: Optional[str] = None) -> Optional[str]:
        return override or self._config.validation.converter


def create_context(config_file: Optional[str] = None) -> CLIContext:
    """Create a CLI context with optional overrides.

    Args:
        config_file: Optional TOML config path.

    Returns:
        Configured CLIContext instance.
    """
    return CLIContext(config_file=config_file)
