"""The generated-file manifest: the only state agentrc keeps between runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from agentrc import __version__
from agentrc.constants import MANIFEST_FILENAME, SOURCE_DIRNAME
from agentrc.utils import read_json_safe, write_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    path: str
    checksum: str
    owned_keys: Optional[tuple[str, ...]] = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "checksum": self.checksum}
        if self.owned_keys is not None:
            payload["owned_keys"] = list(self.owned_keys)
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ManifestEntry":
        owned = payload.get("owned_keys")
        return cls(
            path=str(payload["path"]),
            checksum=str(payload.get("checksum", "")),
            owned_keys=tuple(owned) if owned is not None else None,
        )


@dataclass
class Manifest:
    version: str = __version__
    files: list[ManifestEntry] = field(default_factory=list)

    def get(self, path: str) -> ManifestEntry | None:
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def paths(self) -> list[str]:
        return [entry.path for entry in self.files]

    def as_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "files": [entry.as_dict() for entry in sorted(self.files, key=lambda e: e.path)],
        }


class ManifestRepository:
    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def path(self) -> Path:
        return self.root / SOURCE_DIRNAME / MANIFEST_FILENAME

    def load(self) -> Manifest | None:
        payload, error = read_json_safe(self.path)
        if error is not None:
            logger.warning("Ignoring unreadable manifest %s: %s", self.path, error)
            return None
        if not isinstance(payload, dict):
            return None
        entries = [
            ManifestEntry.from_dict(item)
            for item in payload.get("files", [])
            if isinstance(item, dict) and "path" in item
        ]
        return Manifest(version=str(payload.get("version", "")), files=entries)

    def save(self, manifest: Manifest) -> None:
        write_json(self.path, manifest.as_dict())
        logger.info("Manifest committed: %d files", len(manifest.files))

    def delete(self) -> bool:
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
