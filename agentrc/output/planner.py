"""Decide, per generated path, how to reconcile it with what is on disk."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from agentrc.adapters.base import AdapterResult, OutputFile, Ownership
from agentrc.output.manifest import Manifest
from agentrc.output.markers import add_marker, has_marker
from agentrc.output.models import Action, ActionKind, ActionStatus, WritePlan
from agentrc.utils import (
    deep_merge,
    dump_json,
    file_checksum,
    leaf_key_paths,
    read_json_safe,
    remove_key_path,
)

logger = logging.getLogger(__name__)


@dataclass
class RunLedger:
    """Paths persisted earlier in the same run, by the target that wrote them."""

    writers: dict[str, str] = field(default_factory=dict)
    contents: dict[str, str] = field(default_factory=dict)
    owned_keys: dict[str, list[str]] = field(default_factory=dict)

    def record(self, action: Action) -> None:
        self.writers[action.relative] = action.target or ""
        if isinstance(action.payload, str):
            self.contents[action.relative] = action.payload
        if action.owned_keys is not None:
            self.owned_keys[action.relative] = list(action.owned_keys)

    def __contains__(self, path: object) -> bool:
        return path in self.writers


def _read_text(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None


class OutputPlanner:
    def __init__(
        self, root: Path, manifest: Optional[Manifest], ledger: Optional[RunLedger] = None
    ) -> None:
        self.root = root
        self.manifest = manifest or Manifest()
        self.ledger = ledger or RunLedger()

    def plan(
        self, target: str, result: AdapterResult, managed_dirs: tuple[str, ...] = ()
    ) -> WritePlan:
        plan = WritePlan()
        for output in result.files:
            if output.ownership == Ownership.SHARED_KEYS:
                action = self._plan_shared_json(target, output, plan)
            else:
                action = self._plan_file(target, output, plan)
            plan.actions.append(action)

        desired = {output.path for output in result.files}
        plan.actions.extend(self._plan_stale(target, managed_dirs, desired, plan))
        return plan

    def _desired_content(self, output: OutputFile) -> str:
        if output.ownership == Ownership.FULL:
            return add_marker(output.path, output.content)
        return output.content

    def _plan_file(self, target: str, output: OutputFile, plan: WritePlan) -> Action:
        path = self.root / output.path
        desired = self._desired_content(output)
        current = _read_text(path) if path.exists() else None
        action = Action(
            kind=ActionKind.WRITE_TEXT,
            path=path,
            relative=output.path,
            status=ActionStatus.CREATE,
            detail="Create generated file",
            payload=desired,
            target=target,
        )

        if output.path in self.ledger:
            first = self.ledger.writers[output.path]
            if self.ledger.contents.get(output.path) != desired:
                plan.warnings.append(
                    f"{output.path} is generated by both {first} and {target}; "
                    f"{target}'s content replaces {first}'s"
                )
                action.status = ActionStatus.UPDATE
                action.detail = f"Replace content written by {first}"
            else:
                action.status = ActionStatus.NOOP
                action.detail = f"Already written by {first}"
            return action

        if not path.exists():
            return action
        if current == desired:
            action.status = ActionStatus.NOOP
            action.detail = "Up to date"
            return action

        action.status = ActionStatus.UPDATE
        action.detail = "Update generated file"
        action.backup = self._needs_backup(output.path, path, current)
        if action.backup:
            action.detail = "Back up and overwrite"
            plan.warnings.append(f"Backed up existing {output.path} before overwriting")
        return action

    def _needs_backup(self, relative: str, path: Path, current: Optional[str]) -> bool:
        entry = self.manifest.get(relative)
        if entry is not None:
            modified = file_checksum(path) != entry.checksum
            if modified:
                logger.info("%s changed since the last build", relative)
            return modified
        if current is None:
            return True
        return not has_marker(relative, current)

    def _plan_shared_json(self, target: str, output: OutputFile, plan: WritePlan) -> Action:
        path = self.root / output.path
        overlay: dict[str, Any] = json.loads(output.content)
        owned = leaf_key_paths(overlay)
        action = Action(
            kind=ActionKind.MERGE_JSON,
            path=path,
            relative=output.path,
            status=ActionStatus.CREATE,
            detail="Create shared settings",
            target=target,
        )

        existing, error = read_json_safe(path)
        base: dict[str, Any] = existing if isinstance(existing, dict) else {}
        if error is not None or (existing is not None and not isinstance(existing, dict)):
            plan.warnings.append(f"{output.path} is not a JSON object; replacing it")
            base = {}

        if output.path in self.ledger:
            owned = sorted(set(self.ledger.owned_keys.get(output.path, [])) | set(owned))
        else:
            entry = self.manifest.get(output.path)
            previous = entry.owned_keys if entry is not None else None
            for key in previous or ():
                remove_key_path(base, key)

        merged = deep_merge(base, overlay)
        desired = dump_json(merged)
        action.payload = desired
        action.owned_keys = owned

        if not path.exists():
            return action
        current = _read_text(path)
        if current == desired:
            action.status = ActionStatus.NOOP
            action.detail = "Up to date"
            return action

        action.status = ActionStatus.UPDATE
        action.detail = f"Merge keys {', '.join(owned)}"
        if output.path not in self.ledger:
            entry = self.manifest.get(output.path)
            action.backup = entry is None or file_checksum(path) != entry.checksum
        if action.backup:
            plan.warnings.append(f"Backed up existing {output.path} before merging")
        return action

    def _plan_stale(
        self,
        target: str,
        managed_dirs: tuple[str, ...],
        desired: set[str],
        plan: WritePlan,
    ) -> list[Action]:
        actions: list[Action] = []
        for directory in managed_dirs:
            base = self.root / directory
            if not base.is_dir():
                continue
            for path in sorted(base.rglob("*")):
                if not path.is_file():
                    continue
                relative = path.relative_to(self.root).as_posix()
                if relative in desired or relative in self.ledger:
                    continue
                if not self._is_generated(relative, path):
                    continue
                action = Action(
                    kind=ActionKind.REMOVE_FILE,
                    path=path,
                    relative=relative,
                    status=ActionStatus.REMOVE,
                    detail="No longer generated",
                    target=target,
                )
                # Marker-bearing but edited since the last build.
                action.backup = not self._matches_manifest(relative, path)
                if action.backup:
                    plan.warnings.append(f"Backed up modified {relative} before removing")
                actions.append(action)
        return actions

    def _matches_manifest(self, relative: str, path: Path) -> bool:
        entry = self.manifest.get(relative)
        return entry is not None and file_checksum(path) == entry.checksum

    def _is_generated(self, relative: str, path: Path) -> bool:
        if self._matches_manifest(relative, path):
            return True
        current = _read_text(path)
        return current is not None and has_marker(relative, current)


def plan_clean(root: Path, manifest: Manifest) -> WritePlan:
    plan = WritePlan()
    for entry in manifest.files:
        path = root / entry.path
        if not path.exists():
            continue
        if entry.owned_keys is not None:
            plan.actions.append(
                Action(
                    kind=ActionKind.REMOVE_KEYS,
                    path=path,
                    relative=entry.path,
                    status=ActionStatus.REMOVE,
                    detail=f"Remove keys {', '.join(entry.owned_keys)}",
                    owned_keys=list(entry.owned_keys),
                )
            )
            continue
        plan.actions.append(
            Action(
                kind=ActionKind.REMOVE_FILE,
                path=path,
                relative=entry.path,
                status=ActionStatus.REMOVE,
                detail="Remove generated file",
            )
        )
    return plan
