"""Persist adapter results target by target and commit the manifest."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from agentrc import __version__
from agentrc.errors import OutputWriteError
from agentrc.output.executor import OutputExecutor
from agentrc.output.manifest import Manifest, ManifestEntry, ManifestRepository
from agentrc.output.models import (
    Action,
    ActionKind,
    BuildReport,
    TargetReport,
    WriteState,
)
from agentrc.output.planner import OutputPlanner, RunLedger, plan_clean
from agentrc.utils import file_checksum, now_stamp

logger = logging.getLogger(__name__)

_PERSIST_KINDS = (ActionKind.WRITE_TEXT, ActionKind.MERGE_JSON)


class OutputWriter:
    def __init__(
        self,
        root: Path,
        manifests: Optional[ManifestRepository] = None,
        stamp: Optional[str] = None,
    ) -> None:
        self.root = root
        self.manifests = manifests or ManifestRepository(root)
        self.stamp = stamp or now_stamp()

    def write(
        self,
        reports: list[TargetReport],
        managed_dirs: Optional[Mapping[str, tuple[str, ...]]] = None,
    ) -> BuildReport:
        """Write every report's files in order; one target failing spares the rest."""
        build = BuildReport(targets=reports)
        previous = self.manifests.load()
        ledger = RunLedger()
        planner = OutputPlanner(self.root, previous, ledger)
        executor = OutputExecutor(self.root, stamp=self.stamp)
        persisted: dict[str, Action] = {}

        for report in reports:
            if report.result is None:
                continue
            build.state = WriteState.RESOLVING_OWNERSHIP
            logger.debug("%s: %s", report.target, build.state.value)
            try:
                report.plan = planner.plan(
                    report.target,
                    report.result,
                    (managed_dirs or {}).get(report.target, ()),
                )
            except (OSError, ValueError) as exc:
                path = getattr(exc, "filename", None) or self.root
                report.error = str(OutputWriteError(Path(path), str(exc)))
                continue

            build.state = self._write_state(report)
            logger.debug("%s: %s", report.target, build.state.value)
            done = len(executor.completed)
            backups = len(executor.backups)
            applied, failed, failures = executor.execute(report.plan)
            report.applied = applied
            report.failed = failed
            report.failures = failures
            report.backups = executor.backups[backups:]

            for action in executor.completed[done:]:
                if action.kind in _PERSIST_KINDS:
                    ledger.record(action)
                    persisted[action.relative] = action
                elif action.kind == ActionKind.REMOVE_FILE:
                    build.removed.append(action.relative)

        manifest = self._next_manifest(previous, persisted, set(build.removed))
        self.manifests.save(manifest)
        build.written = sorted(
            relative
            for relative, action in persisted.items()
            if action.kind == ActionKind.WRITE_TEXT
        )
        build.merged = sorted(
            relative
            for relative, action in persisted.items()
            if action.kind == ActionKind.MERGE_JSON
        )
        build.state = (
            WriteState.MANIFEST_COMMITTED if build.ok else WriteState.PARTIAL_FAILURE
        )
        logger.info("Build finished: %s", build.state.value)
        return build

    def preview(
        self,
        reports: list[TargetReport],
        managed_dirs: Optional[Mapping[str, tuple[str, ...]]] = None,
    ) -> BuildReport:
        """Plan every target as ``write`` would, without touching the disk."""
        ledger = RunLedger()
        planner = OutputPlanner(self.root, self.manifests.load(), ledger)
        for report in reports:
            if report.result is None:
                continue
            report.plan = planner.plan(
                report.target, report.result, (managed_dirs or {}).get(report.target, ())
            )
            for action in report.plan.actions:
                if action.kind in _PERSIST_KINDS:
                    ledger.record(action)
        return BuildReport(targets=reports, dry_run=True)

    @staticmethod
    def _write_state(report: TargetReport) -> WriteState:
        actions = report.plan.actions if report.plan is not None else []
        if any(action.backup for action in actions):
            return WriteState.BACKING_UP
        if any(action.kind == ActionKind.MERGE_JSON for action in actions):
            return WriteState.MERGING
        return WriteState.OVERWRITING

    def _next_manifest(
        self,
        previous: Optional[Manifest],
        persisted: Mapping[str, Action],
        removed: set[str],
    ) -> Manifest:
        entries: dict[str, ManifestEntry] = {}
        for entry in previous.files if previous is not None else []:
            if entry.path in removed or entry.path in persisted:
                continue
            if (self.root / entry.path).exists():
                entries[entry.path] = entry

        for relative, action in persisted.items():
            digest = file_checksum(action.path)
            if digest is None:
                continue
            owned = tuple(action.owned_keys) if action.owned_keys is not None else None
            entries[relative] = ManifestEntry(path=relative, checksum=digest, owned_keys=owned)
        return Manifest(version=__version__, files=list(entries.values()))

    def clean(self) -> Optional[list[str]]:
        """Remove every tracked file (only owned keys from shared ones).

        Returns ``None`` when there is no manifest to act on.
        """
        manifest = self.manifests.load()
        if manifest is None:
            return None
        plan = plan_clean(self.root, manifest)
        executor = OutputExecutor(self.root, stamp=self.stamp)
        _, failed, failures = executor.execute(plan)
        if failed:
            raise OutputWriteError(self.manifests.path, "; ".join(failures))
        self.manifests.delete()
        return [action.relative for action in executor.completed]
