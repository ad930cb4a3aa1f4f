"""Build orchestration shared by the CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from agentrc.adapters.base import IAdapter
from agentrc.adapters.registry import AdapterRegistry, create_default_registry
from agentrc.core.builder import build_ir
from agentrc.core.ir import IR
from agentrc.core.loader import load_agentrc
from agentrc.core.source import LoadedSource
from agentrc.errors import GenerationError
from agentrc.output.gitignore import remove_gitignore_block, update_gitignore
from agentrc.output.models import BuildReport, TargetReport
from agentrc.output.writer import OutputWriter

logger = logging.getLogger(__name__)


def parse_target_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class BuildService:
    def __init__(
        self,
        root: Path,
        registry: Optional[AdapterRegistry] = None,
        writer: Optional[OutputWriter] = None,
    ) -> None:
        self.root = root
        self.registry = registry or create_default_registry()
        self.writer = writer or OutputWriter(root)

    def load(self) -> LoadedSource:
        return load_agentrc(self.root)

    def load_ir(self) -> IR:
        return build_ir(self.load())

    def resolve_targets(self, ir: IR, override: Iterable[str] = ()) -> list[IAdapter]:
        """Adapters for ``override`` when given, else for the configured targets."""
        names = list(override) or list(ir.targets)
        return self.registry.resolve(dict.fromkeys(names))

    def generate(self, ir: IR, adapters: Iterable[IAdapter]) -> list[TargetReport]:
        reports: list[TargetReport] = []
        for adapter in adapters:
            report = TargetReport(target=adapter.name)
            try:
                report.result = adapter.generate(ir)
            except Exception as exc:
                logger.debug("Adapter %s raised", adapter.name, exc_info=True)
                report.error = str(GenerationError(adapter.name, exc))
            reports.append(report)
        return reports

    def build(self, targets: Iterable[str] = (), dry_run: bool = False) -> BuildReport:
        ir = self.load_ir()
        adapters = self.resolve_targets(ir, targets)
        if not adapters:
            return BuildReport(dry_run=dry_run)
        logger.info("Building targets: %s", ", ".join(adapter.name for adapter in adapters))

        reports = self.generate(ir, adapters)
        managed = {adapter.name: adapter.managed_dirs for adapter in adapters}
        if dry_run:
            return self.writer.preview(reports, managed)

        build = self.writer.write(reports, managed)
        update_gitignore(self.root, self.ignored_paths())
        return build

    def ignored_paths(self) -> list[str]:
        """Tracked files agentrc fully owns; shared settings stay committed."""
        manifest = self.writer.manifests.load()
        if manifest is None:
            return []
        return [entry.path for entry in manifest.files if entry.owned_keys is None]

    def inspect(self, platform: str) -> TargetReport:
        adapter = self.registry.get(platform)
        return self.generate(self.load_ir(), [adapter])[0]

    def clean(self) -> Optional[list[str]]:
        removed = self.writer.clean()
        if removed is not None:
            remove_gitignore_block(self.root)
        return removed
