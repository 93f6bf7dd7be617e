"""JSON-backed configuration with recursive merging."""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, Mapping, Optional

DEFAULTS: Dict[str, Any] = {
    "port": "4096",
    "save_path": "./save.nm",
    "game": "save.nm",
    "log_file": "ours.log",
    "show_overflagged": True,
}


def _merge_values(base: Any, other: Any) -> Any:
    """Overlay ``other`` onto ``base``: objects and arrays merge, other values replace."""
    if isinstance(base, dict) and isinstance(other, Mapping):
        result = dict(base)
        for key, value in other.items():
            result[key] = _merge_values(result[key], value) if key in result else copy.deepcopy(value)
        return result
    if isinstance(base, list) and isinstance(other, list):
        result_list = list(base)
        for index, value in enumerate(other):
            if index < len(result_list):
                result_list[index] = _merge_values(result_list[index], value)
            else:
                result_list.append(copy.deepcopy(value))
        return result_list
    return copy.deepcopy(other)


def _require_object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("configuration must be a JSON object")
    return data


class Config:
    """A JSON object of settings that can be loaded, merged and saved."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = {}
        self.filename: Optional[str] = None
        if data is not None:
            self.merge(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` when it is not set."""
        return self._data.get(key, default)

    def save(self, filename: Optional[str] = None) -> None:
        """Write the settings as indented JSON to ``filename`` or the loaded file."""
        target = filename if filename is not None else self.filename
        if not target:
            raise ValueError("no file name to save the configuration to")
        with open(target, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(self._data, indent=4) + "\n")

    def load(self, filename: str, merge: bool = True) -> bool:
        """Read settings from ``filename``; return False if the file cannot be opened.

        With ``merge`` the file's settings are overlaid on the current ones,
        otherwise they replace them.
        """
        self.filename = filename
        try:
            with open(filename, encoding="utf-8") as handle:
                loaded = json.load(handle)
        except OSError:
            return False
        if merge:
            self.merge(loaded)
        else:
            self._data = dict(_require_object(loaded))
        return True

    def merge(self, other: Mapping[str, Any]) -> None:
        """Overlay the settings in ``other`` onto this configuration."""
        self._data = _merge_values(self._data, _require_object(other))