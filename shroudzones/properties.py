#==============================================================================
# Shroud Zones - Property Store
#==============================================================================
# File: properties.py
# Description: Key-value server properties loaded from YAML
#==============================================================================

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union


class PropertyStore:
    """Key-value property store backed by a YAML file or an in-memory dict."""

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        self.path = Path(path) if path else None
        self.data = dict(data) if data else {}

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PropertyStore":
        """Load properties from a YAML file."""
        store = cls(path=path)
        store.reload()
        return store

    def reload(self) -> None:
        """Re-read the backing YAML file, replacing all values."""
        if self.path is None:
            return
        self.data = self._load_yaml()

    def _load_yaml(self) -> Dict[str, Any]:
        """Read YAML file and return as dictionary."""
        if not self.path.exists():
            raise FileNotFoundError(f"Properties file not found: {self.path}")

        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Properties file must contain a mapping, got {type(data).__name__}: {self.path}"
            )
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get property value by key. Supports nested keys with dots.
        Example: store.get('world.shroud_zone_entries')
        """
        keys = key.split('.')
        value = self.data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

            if value is None:
                return default

        return value

    def get_string(self, key: str, default: str = "") -> str:
        """
        Get a property as a string, falling back to default when unset.

        A YAML list is joined one item per line, so list-style entries read
        the same as a block string. Mappings are not string properties and
        return the default.
        """
        value = self.get(key)
        if value is None or isinstance(value, dict):
            return default
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return "\n".join(str(item) for item in value if item is not None)
        return str(value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
