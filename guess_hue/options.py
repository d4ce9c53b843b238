from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

OPTIONS_STORE_ENV = "GUESS_HUE_OPTIONS_PATH"


@dataclass(slots=True)
class GameOptions:
    mute: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"mute": bool(self.mute)}

    @classmethod
    def from_dict(cls, data: object) -> "GameOptions":
        if not isinstance(data, dict):
            return cls()
        mute = data.get("mute", False)
        return cls(mute=mute if isinstance(mute, bool) else False)


class OptionsStore:
    """Player options kept in a small JSON file."""

    _version = 1

    def __init__(self, path: Path) -> None:
        self._path = path
        self._options = GameOptions()
        self._load()

    @classmethod
    def default_path(cls) -> Path:
        explicit = os.environ.get(OPTIONS_STORE_ENV)
        if explicit:
            return Path(explicit).expanduser()
        return Path.home() / ".guess_hue_options.json"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def options(self) -> GameOptions:
        return self._options

    @property
    def mute(self) -> bool:
        return self._options.mute

    def set_mute(self, mute: bool) -> None:
        self._options.mute = bool(mute)
        self.save()

    def toggle_mute(self) -> bool:
        self.set_mute(not self._options.mute)
        return self._options.mute

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable options file %s: %s", self._path, exc)
            return
        if not isinstance(payload, dict):
            return
        self._options = GameOptions.from_dict(payload.get("options"))

    def save(self) -> None:
        payload = {
            "version": self._version,
            "options": self._options.to_dict(),
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.warning("Could not save options to %s: %s", self._path, exc)
