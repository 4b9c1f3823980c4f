"""Persist resource state handles as JSON documents."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fmcsync.domain.state import StateHandle

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel

log = getLogger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9._-]+")


class StateFileError(RuntimeError):
    """Raised when a state document cannot be read."""


def state_key(name: str) -> str:
    """Return a filesystem-safe key for a resource name."""

    key = _SAFE_KEY.sub("_", name.strip()).strip("._")
    if not key:
        raise ValueError(f"Cannot derive a state key from {name!r}")
    return key


@dataclass(slots=True)
class JsonStateStore:
    """One ``<key>.json`` file per resource: ``{"id": ..., "attributes": {...}}``."""

    directory: Path

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def load[S: BaseModel](self, key: str, model: type[S]) -> StateHandle[S]:
        path = self.path_for(key)
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise StateFileError(f"No state stored for {key!r} at {path}") from exc
        except json.JSONDecodeError as exc:
            raise StateFileError(f"State file {path} is not valid JSON") from exc
        if not isinstance(document, dict) or "attributes" not in document:
            raise StateFileError(f"State file {path} has no attributes")
        record = model.model_validate(document["attributes"])
        return StateHandle(record, identity=str(document.get("id") or ""))

    def save(self, key: str, handle: StateHandle) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        document = {"id": handle.identity, "attributes": dict(handle.attributes())}
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(document, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(path)
        log.debug("Saved state %s to %s", key, path)
        return path

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)
