"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, config_from_dict, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

SETTINGS_FILE = "settings.yaml"
SEED_FILE = "seed.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration and seed loading from a config directory."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            content = yaml.safe_load(f)

        return content or {}

    def load_overrides(self) -> dict[str, Any]:
        """Load deployment overrides from settings.yaml."""
        return self._read_yaml(SETTINGS_FILE)

    def load_seed(self) -> dict[str, Any]:
        """Load the initial inventory document from seed.yaml."""
        return self._read_yaml(SEED_FILE)

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_overrides())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Merge and validate configuration, returning it as typed dataclasses.

        Raises:
            ConfigurationError: If any merged value or key fails validation
        """
        merged = self.merge_config(overrides)

        issues = ConfigValidator.validate_config(merged)
        if issues:
            error_msgs = [f"{issue.field}: {issue.message} (got: {issue.value})" for issue in issues]
            logger.error("Configuration validation failed", config_dir=str(self.config_dir), errors=error_msgs)
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(error_msgs)}",
                issues=issues,
                context={"config_dir": str(self.config_dir)},
            )

        return config_from_dict(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
