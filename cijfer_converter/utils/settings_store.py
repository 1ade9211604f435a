"""File-based key-value store for persisted settings."""

import json
import logging
from hashlib import md5
from pathlib import Path
from typing import Any, Callable

from ..config import STORAGE_KEY
from ..grading.exceptions import ConfigurationError
from ..grading.models import GradingConfiguration

logger = logging.getLogger(__name__)


class SettingsStore:
    """
    Simple file-based key-value store.

    Each key is stored as one JSON file in the settings directory. Values
    that cannot be read back are treated as absent.

    Usage:
        store = SettingsStore(settings_dir="~/.cijfer-calculator")

        config = store.load("cijfer-calculator-config", default={})
        store.save("cijfer-calculator-config", config)
    """

    def __init__(self, settings_dir: str | Path):
        """
        Initialize store.

        Args:
            settings_dir: Directory to store settings files.
        """
        self.settings_dir = Path(settings_dir).expanduser()

    def _ensure_settings_dir(self) -> None:
        """Create settings directory if it doesn't exist."""
        self.settings_dir.mkdir(parents=True, exist_ok=True)

    def _settings_key(self, key: str) -> str:
        """Generate file-safe name from key."""
        return md5(key.encode()).hexdigest()

    def _settings_file(self, key: str) -> Path:
        """Get settings file path for key."""
        return self.settings_dir / f"{self._settings_key(key)}.json"

    def load(self, key: str, default: Any = None) -> Any:
        """
        Get stored value for key.

        Args:
            key: Key to look up.
            default: Value returned when the key is missing or unreadable.

        Returns:
            The decoded JSON value, or default.
        """
        settings_file = self._settings_file(key)

        if not settings_file.exists():
            return default

        try:
            return json.loads(settings_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Error reading settings key %r: %s", key, e)
            return default

    def save(self, key: str, value: Any) -> bool:
        """
        Store value under key.

        Args:
            key: Key to store under.
            value: JSON-serializable value.

        Returns:
            True if written, False if the write failed.
        """
        try:
            self._ensure_settings_dir()
            self._settings_file(key).write_text(
                json.dumps(value, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Error saving settings key %r: %s", key, e)
            return False
        return True

    def delete(self, key: str) -> bool:
        """
        Delete stored value for key.

        Returns:
            True if deleted, False if not found.
        """
        settings_file = self._settings_file(key)

        if settings_file.exists():
            settings_file.unlink()
            return True
        return False


def load_configuration(store: SettingsStore, key: str = STORAGE_KEY) -> GradingConfiguration:
    """Load the persisted configuration, falling back to defaults."""
    data = store.load(key)
    if data is None:
        return GradingConfiguration()

    try:
        return GradingConfiguration.from_dict(data)
    except ConfigurationError as e:
        logger.warning("Discarding stored configuration %r: %s", key, e)
        return GradingConfiguration()


def save_configuration(
    store: SettingsStore,
    config: GradingConfiguration,
    key: str = STORAGE_KEY,
) -> bool:
    """Persist the configuration as its JSON blob."""
    return store.save(key, config.to_dict())


Listener = Callable[[GradingConfiguration], None]


class ConfigurationCell:
    """
    Holds the current grading configuration for a front end.

    The configuration itself stays immutable; updates swap in a new snapshot
    and notify listeners, e.g. a hook that saves it.

    Usage:
        cell = ConfigurationCell(load_configuration(store))
        cell.bind_store(store)
        cell.update(method="percentage", pass_percentage=60)
    """

    def __init__(self, config: GradingConfiguration | None = None):
        self._config = config or GradingConfiguration()
        self._listeners: list[Listener] = []

    @property
    def config(self) -> GradingConfiguration:
        return self._config

    def subscribe(self, listener: Listener) -> None:
        """Call listener with every new configuration."""
        self._listeners.append(listener)

    def bind_store(self, store: SettingsStore, key: str = STORAGE_KEY) -> None:
        """Persist the configuration on every change."""
        self.subscribe(lambda config: save_configuration(store, config, key))

    def set(self, config: GradingConfiguration) -> None:
        """Replace the current configuration."""
        if config == self._config:
            return
        self._config = config
        self._notify()

    def _notify(self) -> None:
        logger.debug("Configuration changed: %s", self._config)
        for listener in self._listeners:
            listener(self._config)

    def update(self, **changes: Any) -> GradingConfiguration:
        """Replace individual fields and return the new configuration."""
        self.set(self._config.with_changes(**changes))
        return self._config

    def reset(self) -> GradingConfiguration:
        """Restore the default configuration, notifying even if nothing changed."""
        self._config = GradingConfiguration()
        self._notify()
        return self._config
