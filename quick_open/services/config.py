"""Configuration management for Quick Open.

Single JSON file at ~/.config/quick-open/config.json holding the finder's
tunables: walk depth, debounce delay, result caps and index rule additions.
Missing keys fall back to defaults; unreadable files fall back entirely.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..models.exceptions import ConfigValidationError
from .debounce import DEFAULT_DELAY
from .indexer import DEFAULT_MAX_DEPTH, DEFAULT_PREVIEW_CHARS

logger = logging.getLogger(__name__)

DEFAULT_NAME_RESULT_LIMIT = 100
DEFAULT_CONTENT_RESULT_LIMIT = 200


@dataclass
class FinderSettings:
    """Tunables for indexing, debouncing and result caps."""

    max_depth: int = DEFAULT_MAX_DEPTH
    debounce_ms: int = int(DEFAULT_DELAY * 1000)
    # Cap for file, buffer and command modes
    name_result_limit: int = DEFAULT_NAME_RESULT_LIMIT
    content_result_limit: int = DEFAULT_CONTENT_RESULT_LIMIT
    # Characters of the matching line kept in content-mode display text
    content_preview_chars: int = DEFAULT_PREVIEW_CHARS
    # Added to the built-in exclude set and extension allow-list
    extra_exclude_dirs: list[str] = field(default_factory=list)
    extra_extensions: list[str] = field(default_factory=list)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    def validate(self) -> None:
        """Raise ConfigValidationError if any value is out of range."""
        if self.max_depth < 1:
            raise ConfigValidationError(
                f"max_depth must be at least 1, got {self.max_depth}",
                suggestion="use 1 to index only the root directory",
            )
        if self.debounce_ms < 0:
            raise ConfigValidationError(f"debounce_ms cannot be negative, got {self.debounce_ms}")
        for name in ("name_result_limit", "content_result_limit", "content_preview_chars"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigValidationError(f"{name} must be positive, got {value}")

    def to_dict(self) -> dict:
        result: dict = {
            "max_depth": self.max_depth,
            "debounce_ms": self.debounce_ms,
            "name_result_limit": self.name_result_limit,
            "content_result_limit": self.content_result_limit,
            "content_preview_chars": self.content_preview_chars,
        }
        if self.extra_exclude_dirs:
            result["extra_exclude_dirs"] = self.extra_exclude_dirs
        if self.extra_extensions:
            result["extra_extensions"] = self.extra_extensions
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "FinderSettings":
        return cls(
            max_depth=int(data.get("max_depth", DEFAULT_MAX_DEPTH)),
            debounce_ms=int(data.get("debounce_ms", int(DEFAULT_DELAY * 1000))),
            name_result_limit=int(data.get("name_result_limit", DEFAULT_NAME_RESULT_LIMIT)),
            content_result_limit=int(data.get("content_result_limit", DEFAULT_CONTENT_RESULT_LIMIT)),
            content_preview_chars=int(data.get("content_preview_chars", DEFAULT_PREVIEW_CHARS)),
            extra_exclude_dirs=list(data.get("extra_exclude_dirs", [])),
            extra_extensions=list(data.get("extra_extensions", [])),
        )


class ConfigManager:
    """Loads and saves finder settings."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".config" / "quick-open"
        self._config_dir = config_dir
        self._config_file = config_dir / "config.json"
        self._settings: FinderSettings | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def settings(self) -> FinderSettings:
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def _load_settings(self) -> FinderSettings:
        """Load settings from disk, falling back to defaults."""
        if not self._config_file.exists():
            return FinderSettings()
        try:
            data = json.loads(self._config_file.read_text())
            settings = FinderSettings.from_dict(data)
            settings.validate()
            return settings
        except (OSError, json.JSONDecodeError, TypeError, ValueError, ConfigValidationError) as e:
            logger.warning(f"Ignoring invalid config file {self._config_file}: {e}")
            return FinderSettings()

    def save_settings(self, settings: FinderSettings) -> None:
        """Validate and save settings to disk."""
        settings.validate()
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(settings.to_dict(), indent=2))
        self._settings = settings

    def update(self, **changes) -> FinderSettings:
        """Apply field changes, save, and return the new settings."""
        settings = replace(self.settings, **changes)
        self.save_settings(settings)
        return settings
