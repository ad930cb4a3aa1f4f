import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from agentrc.constants import BACKUP_DIRNAME, SOURCE_DIRNAME
from agentrc.errors import OutputWriteError
from agentrc.output.models import Action, ActionKind, ActionStatus, WritePlan
from agentrc.utils import (
    backup_file,
    now_stamp,
    prune_empty_dirs,
    read_json,
    remove_key_path,
    write_json,
    write_text,
)

logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    root: Path
    stamp: str
    backups: list[str] = field(default_factory=list)

    @property
    def backup_root(self) -> Path:
        return self.root / SOURCE_DIRNAME / BACKUP_DIRNAME

    def backup(self, action: Action) -> None:
        if not action.path.exists():
            return
        backup_path = backup_file(action.path, self.backup_root, action.relative, self.stamp)
        logger.info("Backed up %s to %s", action.relative, backup_path)
        self.backups.append(action.relative)


class ActionHandler(Protocol):
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.relative}"

        if action.backup:
            context.backup(action)
        write_text(action.path, action.payload)
        return True, None


class RemoveFileHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if not action.path.exists():
            return False, None
        if action.backup:
            context.backup(action)
        action.path.unlink()
        prune_empty_dirs(action.path.parent, context.root)
        return True, None


class RemoveKeysHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if not action.path.exists():
            return False, None
        try:
            payload = read_json(action.path)
        except ValueError as exc:
            return False, f"Cannot remove keys from invalid JSON {action.relative}: {exc}"
        if not isinstance(payload, dict):
            return False, f"Cannot remove keys from non-object JSON {action.relative}"

        changed = False
        for key in action.owned_keys or []:
            changed = remove_key_path(payload, key) or changed
        if not payload:
            action.path.unlink()
            prune_empty_dirs(action.path.parent, context.root)
            return True, None
        if changed:
            write_json(action.path, payload)
        return changed, None


class OutputExecutor:
    def __init__(self, root: Path, stamp: Optional[str] = None) -> None:
        self.context = ExecutionContext(root=root, stamp=stamp or now_stamp())
        self.completed: list[Action] = []
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.MERGE_JSON: WriteTextHandler(),
            ActionKind.REMOVE_FILE: RemoveFileHandler(),
            ActionKind.REMOVE_KEYS: RemoveKeysHandler(),
        }

    @property
    def backups(self) -> list[str]:
        return self.context.backups

    def execute(self, plan: WritePlan) -> tuple[int, int, list[str]]:
        applied = 0
        failed = 0
        failures: list[str] = []

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    failed += 1
                    failures.append(f"Unknown action kind: {action.kind.value}")
                    continue

                changed, failure = handler.handle(action, self.context)
                if failure is not None:
                    failed += 1
                    failures.append(failure)
                    continue
                self.completed.append(action)
                if changed:
                    applied += 1
            except OSError as exc:
                failed += 1
                error = OutputWriteError(action.path, exc.strerror or str(exc))
                failures.append(str(error))
                logger.debug("%s failed for %s", action.kind.value, action.relative, exc_info=True)

        return applied, failed, failures
