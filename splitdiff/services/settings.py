"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Optional

from splitdiff.core.display.collapse import COLLAPSE_CONTEXT


class DiffStyle(Enum):
    """Diff display style."""
    SIDE_BY_SIDE = auto()
    HUNKS_ONLY = auto()


@dataclass
class ComparisonSettings:
    """Settings for text comparison."""
    ignore_whitespace: bool = False
    collapse_unchanged: bool = True
    context_lines: int = COLLAPSE_CONTEXT


@dataclass
class DisplaySettings:
    """Settings for terminal output."""
    diff_style: DiffStyle = DiffStyle.SIDE_BY_SIDE
    width: int = 160
    tab_size: int = 4
    show_line_numbers: bool = True
    use_colors: bool = True


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)


SettingsObserver = Callable[[ApplicationSettings], None]


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[SettingsObserver] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'SplitDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'splitdiff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.warning(f"SettingsManager - Could not read {self.settings_path}: {e}")
            return ApplicationSettings()

        if not isinstance(data, dict):
            logging.warning(f"SettingsManager - Ignoring malformed settings in {self.settings_path}")
            return ApplicationSettings()

        try:
            return self._from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            logging.warning(f"SettingsManager - Invalid value in {self.settings_path}: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(settings), f, indent=2)
        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

        self._settings = settings
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: SettingsObserver) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: SettingsObserver) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            callback(self._settings)

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """
        Convert dictionary back to settings objects.

        Raises:
            ValueError: If a value has the wrong type or is out of range
        """
        def get_enum(enum_class: type, value: Any) -> Enum:
            if isinstance(value, str):
                try:
                    return enum_class[value]
                except KeyError:
                    return list(enum_class)[0]
            return list(enum_class)[0]

        def get_bool(section: dict, key: str, default: bool) -> bool:
            value = section.get(key, default)
            if not isinstance(value, bool):
                raise ValueError(f"{key} must be true or false, got {value!r}")
            return value

        def get_int(section: dict, key: str, default: int, minimum: int) -> int:
            value = section.get(key, default)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer, got {value!r}")
            if value < minimum:
                raise ValueError(f"{key} must be at least {minimum}, got {value}")
            return value

        comparison_data = data.get('comparison', {}) or {}
        defaults = ComparisonSettings()
        comparison = ComparisonSettings(
            ignore_whitespace=get_bool(comparison_data, 'ignore_whitespace', defaults.ignore_whitespace),
            collapse_unchanged=get_bool(comparison_data, 'collapse_unchanged', defaults.collapse_unchanged),
            context_lines=get_int(comparison_data, 'context_lines', defaults.context_lines, 0),
        )

        display_data = data.get('display', {}) or {}
        display_defaults = DisplaySettings()
        display = DisplaySettings(
            diff_style=get_enum(DiffStyle, display_data.get('diff_style', 'SIDE_BY_SIDE')),
            width=get_int(display_data, 'width', display_defaults.width, 1),
            tab_size=get_int(display_data, 'tab_size', display_defaults.tab_size, 0),
            show_line_numbers=get_bool(display_data, 'show_line_numbers', display_defaults.show_line_numbers),
            use_colors=get_bool(display_data, 'use_colors', display_defaults.use_colors),
        )

        return ApplicationSettings(comparison=comparison, display=display)
