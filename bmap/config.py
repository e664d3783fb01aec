"""BMap configuration."""

from enum import Enum
from typing import Optional
import os

import yaml

from bmap.exceptions import ConfigurationException


class ReentrancyPolicy(Enum):
    """What happens when a listener mutates the map that is notifying it."""
    ALLOW = "ALLOW"
    FORBID = "FORBID"


class SerializationConfig:
    """Configuration for JSON serialization of the entry-array view."""

    def __init__(
        self,
        compact: bool = True,
        indent: Optional[int] = None,
        ensure_ascii: bool = False,
        tuple_keys: bool = True,
    ):
        self._compact = compact
        self._indent = indent
        self._ensure_ascii = ensure_ascii
        self._tuple_keys = tuple_keys
        self._validate()

    def _validate(self) -> None:
        if self._indent is None:
            return
        if isinstance(self._indent, bool) or not isinstance(self._indent, int):
            raise ConfigurationException(
                f"indent must be an integer, got {type(self._indent).__name__}"
            )
        if self._indent < 0:
            raise ConfigurationException("indent must be non-negative")

    @property
    def compact(self) -> bool:
        """Get whether compact separators are used."""
        return self._compact

    @compact.setter
    def compact(self, value: bool) -> None:
        self._compact = value

    @property
    def indent(self) -> Optional[int]:
        """Get the indent level, or None for single-line output."""
        return self._indent

    @indent.setter
    def indent(self, value: Optional[int]) -> None:
        self._indent = value
        self._validate()

    @property
    def ensure_ascii(self) -> bool:
        """Get whether non-ASCII characters are escaped."""
        return self._ensure_ascii

    @ensure_ascii.setter
    def ensure_ascii(self, value: bool) -> None:
        self._ensure_ascii = value

    @property
    def tuple_keys(self) -> bool:
        """Get whether decoded list keys are converted to tuples."""
        return self._tuple_keys

    @tuple_keys.setter
    def tuple_keys(self, value: bool) -> None:
        self._tuple_keys = value

    @property
    def separators(self) -> Optional[tuple]:
        """Get the separators passed to the JSON encoder."""
        if self._compact:
            return (",", ":")
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "SerializationConfig":
        """Create SerializationConfig from a dictionary."""
        return cls(
            compact=data.get("compact", True),
            indent=data.get("indent"),
            ensure_ascii=data.get("ensure_ascii", False),
            tuple_keys=data.get("tuple_keys", True),
        )


class BMapConfig:
    """Configuration for a BMap instance.

    The configuration is shared by a map and every container derived from
    it (notification payloads, filter, b_get, map_* and merge results).

    Attributes:
        reentrancy: Policy applied when a listener mutates the map that is
            currently dispatching to it.
        serialization: Serialization configuration.
        log_dispatch: Whether each dispatch is logged at DEBUG level.

    Example:
        Basic configuration::

            config = BMapConfig()
            config.reentrancy = ReentrancyPolicy.FORBID
            people = BMap(config=config)

        From YAML file::

            config = BMapConfig.from_yaml("bmap.yml")
    """

    def __init__(
        self,
        reentrancy: ReentrancyPolicy = ReentrancyPolicy.ALLOW,
        serialization: Optional[SerializationConfig] = None,
        log_dispatch: bool = True,
    ):
        self._reentrancy = self._parse_reentrancy(reentrancy)
        self._serialization = serialization or SerializationConfig()
        self._log_dispatch = log_dispatch

    @staticmethod
    def _parse_reentrancy(value) -> ReentrancyPolicy:
        if isinstance(value, ReentrancyPolicy):
            return value
        try:
            return ReentrancyPolicy(str(value).upper())
        except ValueError:
            raise ConfigurationException(
                f"Invalid reentrancy policy: {value}. "
                f"Must be one of {[p.value for p in ReentrancyPolicy]}"
            )

    @property
    def reentrancy(self) -> ReentrancyPolicy:
        """Get the reentrancy policy."""
        return self._reentrancy

    @reentrancy.setter
    def reentrancy(self, value: ReentrancyPolicy) -> None:
        self._reentrancy = self._parse_reentrancy(value)

    @property
    def serialization(self) -> SerializationConfig:
        """Get the serialization configuration."""
        return self._serialization

    @serialization.setter
    def serialization(self, value: SerializationConfig) -> None:
        self._serialization = value

    @property
    def log_dispatch(self) -> bool:
        """Get whether dispatches are logged."""
        return self._log_dispatch

    @log_dispatch.setter
    def log_dispatch(self, value: bool) -> None:
        self._log_dispatch = value

    @classmethod
    def from_dict(cls, data: dict) -> "BMapConfig":
        """Create BMapConfig from a dictionary."""
        config = cls()

        if "reentrancy" in data:
            config.reentrancy = data["reentrancy"]

        if "serialization" in data:
            serialization = data["serialization"] or {}
            if not isinstance(serialization, dict):
                raise ConfigurationException(
                    f"serialization must be a mapping, got {type(serialization).__name__}"
                )
            config.serialization = SerializationConfig.from_dict(serialization)

        if "log_dispatch" in data:
            config.log_dispatch = bool(data["log_dispatch"])

        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "BMapConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            BMapConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}", cause=e)

        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "BMapConfig":
        """Load configuration from a YAML string.

        Args:
            yaml_content: YAML configuration as a string.

        Returns:
            BMapConfig instance.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)

        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data) -> "BMapConfig":
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        if "bmap" in data:
            data = data["bmap"] or {}

        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"BMapConfig(reentrancy={self._reentrancy.value}, "
            f"log_dispatch={self._log_dispatch})"
        )
