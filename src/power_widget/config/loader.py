"""Settings store with YAML file backing and change observers."""

import os
import sys

from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from pydantic import ValidationError

from ..utils.debug import debug_log
from .defaults import get_default_settings
from .schema import WidgetSettings

SettingsObserver = Callable[[str], None]

_MISSING = object()


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "power-widget"


def get_config_path() -> Path:
    """Get the full settings file path."""
    return get_config_dir() / "settings.yaml"


class SettingsStore:
    """Key-value settings with per-key change observers.

    Observers are called synchronously with the changed key, and only when
    the stored value actually changes. A store created with a path writes
    every change through to that YAML file.
    """

    def __init__(
        self, values: Optional[dict[str, Any]] = None, path: Optional[Path] = None
    ):
        self._values: dict[str, Any] = dict(values or {})
        self._path = path
        self._observers: dict[str, list[SettingsObserver]] = {}
        self._mtime = self._current_mtime()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def get_int(self, key: str, default: int) -> int:
        """Read an integer setting, falling back to default for absent or bad values."""
        value = self._values.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def put(self, key: str, value: Any) -> None:
        if self._values.get(key, _MISSING) == value:
            return
        self._values[key] = value
        self._persist()
        self._notify(key)

    def remove(self, key: str) -> None:
        if key not in self._values:
            return
        del self._values[key]
        self._persist()
        self._notify(key)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def register_observer(self, key: str, observer: SettingsObserver) -> None:
        observers = self._observers.setdefault(key, [])
        if observer not in observers:
            observers.append(observer)

    def unregister_observer(self, observer: SettingsObserver) -> None:
        """Remove an observer from every key it watches."""
        for key in list(self._observers):
            remaining = [o for o in self._observers[key] if o != observer]
            if remaining:
                self._observers[key] = remaining
            else:
                del self._observers[key]

    def observed_keys(self) -> set[str]:
        return set(self._observers)

    def reload(self) -> list[str]:
        """Re-read the backing file if it changed on disk.

        Observers are notified for every key whose value differs from the
        previous contents.

        Returns:
            Keys that changed, in notification order
        """
        if self._path is None:
            return []

        mtime = self._current_mtime()
        if mtime == self._mtime:
            return []

        try:
            new_values = load_settings_file(self._path)
        except (yaml.YAMLError, ValidationError, OSError) as e:
            print(
                f"Warning: Failed to reload settings from {self._path}: {e}",
                file=sys.stderr,
            )
            return []

        self._mtime = mtime
        old_values = self._values
        self._values = new_values

        changed = [
            key
            for key in list(new_values) + [k for k in old_values if k not in new_values]
            if old_values.get(key, _MISSING) != new_values.get(key, _MISSING)
        ]
        for key in changed:
            self._notify(key)
        return changed

    def _notify(self, key: str) -> None:
        debug_log(f"Setting changed: {key}")
        for observer in list(self._observers.get(key, ())):
            observer(key)

    def _persist(self) -> None:
        if self._path is None:
            return
        save_settings(self._values, self._path)
        self._mtime = self._current_mtime()

    def _current_mtime(self) -> float:
        if self._path is None:
            return 0.0
        try:
            return self._path.stat().st_mtime
        except OSError:
            return 0.0


def load_settings_file(path: Path) -> dict[str, Any]:
    """Load and validate a settings file.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        ValidationError: If the settings fail validation
        OSError: If the file cannot be read
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    settings = WidgetSettings.model_validate(data)
    validated = settings.model_dump(mode="python")

    # Keys missing from the file stay missing, so readers see their own defaults
    return {
        key: validated.get(key, value)
        for key, value in data.items()
        if validated.get(key, value) is not None
    }


def load_settings(path: Optional[Path] = None) -> SettingsStore:
    """
    Load the settings store from its YAML file.

    If the file doesn't exist, creates it with defaults.
    If the file is invalid, falls back to defaults and leaves the file alone.
    """
    settings_path = path or get_config_path()

    if not settings_path.exists():
        values = get_default_settings()
        save_settings(values, settings_path)
        return SettingsStore(values, path=settings_path)

    try:
        values = load_settings_file(settings_path)
        return SettingsStore(values, path=settings_path)
    except (yaml.YAMLError, ValidationError, OSError) as e:
        print(
            f"Warning: Failed to load settings from {settings_path}: {e}",
            file=sys.stderr,
        )
        print("Using default settings.", file=sys.stderr)
        return SettingsStore(get_default_settings())


def save_settings(
    settings: Union[SettingsStore, dict[str, Any]], path: Optional[Path] = None
) -> None:
    """Save settings to a YAML file."""
    if isinstance(settings, SettingsStore):
        values = settings.as_dict()
    else:
        values = dict(settings)

    settings_path = path or get_config_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_path, "w", encoding="utf-8") as f:
        yaml.dump(values, f, default_flow_style=False, sort_keys=False)
