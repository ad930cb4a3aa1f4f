from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from agentrc.adapters.base import AdapterResult


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    MERGE_JSON = "merge_json"
    REMOVE_FILE = "remove_file"
    REMOVE_KEYS = "remove_keys"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


class WriteState(str, Enum):
    IDLE = "idle"
    RESOLVING_OWNERSHIP = "resolving-ownership"
    MERGING = "merging"
    OVERWRITING = "overwriting"
    BACKING_UP = "backing-up"
    MANIFEST_COMMITTED = "manifest-committed"
    PARTIAL_FAILURE = "partial-failure"


@dataclass
class Action:
    kind: ActionKind
    path: Path
    relative: str
    status: ActionStatus
    detail: str
    payload: Optional[Any] = None
    target: Optional[str] = None
    backup: bool = False
    owned_keys: Optional[list[str]] = None


@dataclass
class WritePlan:
    actions: list[Action] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for action in self.actions:
            counts[action.status.value] += 1
        counts["actions"] = len(self.actions)
        counts["backups"] = sum(1 for action in self.actions if action.backup)
        return counts


@dataclass
class TargetReport:
    target: str
    result: Optional[AdapterResult] = None
    plan: Optional[WritePlan] = None
    applied: int = 0
    failed: int = 0
    failures: list[str] = field(default_factory=list)
    backups: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.failed == 0

    @property
    def warnings(self) -> list[str]:
        warnings: list[str] = []
        if self.result is not None:
            warnings.extend(self.result.warnings)
        if self.plan is not None:
            warnings.extend(self.plan.warnings)
        return warnings


@dataclass
class BuildReport:
    targets: list[TargetReport] = field(default_factory=list)
    state: WriteState = WriteState.IDLE
    written: list[str] = field(default_factory=list)
    merged: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return all(report.ok for report in self.targets)

    @property
    def backups(self) -> list[str]:
        return [path for report in self.targets for path in report.backups]

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for report in self.targets:
            if report.plan is None:
                continue
            for key, value in report.plan.summary().items():
                if key in counts:
                    counts[key] += value
        counts["targets"] = len(self.targets)
        counts["failed"] = sum(1 for report in self.targets if not report.ok)
        counts["backups"] = len(self.backups)
        return counts
