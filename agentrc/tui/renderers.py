from typing import Optional

from rich.console import Console
from rich.markup import escape

from agentrc.adapters.base import IAdapter
from agentrc.core.source import LoadedSource
from agentrc.output.models import BuildReport, TargetReport
from agentrc.tui.enums import UIStyle
from agentrc.tui.sections import UISection
from agentrc.tui.tables import BuildTable, FeatureTable, PlanTable, TargetsTable
from agentrc.utils import compact_home_path


class BuildConsoleUI:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render_loading(self, root: str) -> None:
        self.console.print(f"[{UIStyle.BLUE.value}]Loading .agentrc/ from {escape(compact_home_path(root))}[/]")

    def render_no_targets(self) -> None:
        self.console.print(
            UISection.note(
                "targets",
                "No targets specified. Add targets to config.yaml or use --targets.",
                style=UIStyle.YELLOW.value,
            )
        )

    def render_target(self, report: TargetReport) -> None:
        if report.result is None:
            self.console.print(
                UISection.note(report.target, escape(report.error or "no result"), style=UIStyle.RED.value)
            )
            return

        lines = [f"[{UIStyle.GREEN.value}]✓ {escape(item)}[/]" for item in report.result.native_features]
        lines.extend(
            f"[{UIStyle.YELLOW.value}]⚠ {escape(item)}[/]" for item in report.result.degraded_features
        )
        lines.extend(f"[{UIStyle.YELLOW.value}]⚠ {escape(item)}[/]" for item in report.result.warnings)
        style = UIStyle.YELLOW.value if report.result.warnings else UIStyle.GREEN.value
        self.console.print(UISection.note(report.target, "\n".join(lines) or "nothing generated", style=style))

    def render_targets_overview(self, build: BuildReport) -> None:
        for report in build.targets:
            self.render_target(report)

    def render_dry_run(self, build: BuildReport) -> None:
        self.render_targets_overview(build)
        self.console.print(
            UISection.wrap(
                "dry run",
                PlanTable.summary_block(build.targets, mode="dry-run"),
                style=UIStyle.BLUE.value,
            )
        )
        actions = [action for report in build.targets if report.plan for action in report.plan.actions]
        if actions:
            self.console.print(
                UISection.wrap("files that would be written", PlanTable.actions_table(actions), style=UIStyle.CYAN.value)
            )
        self._render_plan_warnings(build)

    def render_build_result(self, build: BuildReport) -> None:
        self.render_targets_overview(build)
        self.console.print(
            UISection.wrap(
                "build",
                BuildTable.stats_table(build),
                style=UIStyle.GREEN.value if build.ok else UIStyle.RED.value,
                subtitle=build.state.value,
            )
        )
        self._render_plan_warnings(build)

        if build.backups:
            self.console.print(
                UISection.note(
                    "backups",
                    f"Backed up {len(build.backups)} existing files to .agentrc/.backup/\n"
                    + UISection.bullets([escape(item) for item in build.backups]),
                    style=UIStyle.YELLOW.value,
                )
            )

        failures: list[str] = []
        for report in build.targets:
            if report.error:
                failures.append(f"{report.target}: {report.error}")
            failures.extend(f"{report.target}: {item}" for item in report.failures)
        if failures:
            self.console.print(
                UISection.note("failures", escape(UISection.bullets(failures)), style=UIStyle.RED.value)
            )

    def _render_plan_warnings(self, build: BuildReport) -> None:
        warnings = [
            f"{report.target}: {item}"
            for report in build.targets
            if report.plan is not None
            for item in report.plan.warnings
        ]
        if warnings:
            self.console.print(
                UISection.note("writer", escape(UISection.bullets(warnings)), style=UIStyle.YELLOW.value)
            )

    def render_inspect(self, report: TargetReport) -> None:
        if report.result is None:
            self.render_target(report)
            return
        self.console.print(
            UISection.wrap(f"{report.target} features", FeatureTable.features_table(report.result), style=UIStyle.BLUE.value)
        )
        self.console.print(
            UISection.wrap(f"{report.target} files", FeatureTable.files_table(report.result), style=UIStyle.CYAN.value)
        )
        if report.result.warnings:
            self.console.print(
                UISection.note(
                    "warnings",
                    escape(UISection.bullets(list(report.result.warnings))),
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_clean(self, removed: Optional[list[str]]) -> None:
        if removed is None:
            self.console.print(UISection.note("clean", "No manifest found. Nothing to clean.", style=UIStyle.YELLOW.value))
            return
        if not removed:
            self.console.print(UISection.note("clean", "No generated files found to remove.", style=UIStyle.YELLOW.value))
            return
        self.console.print(
            UISection.note(
                "clean",
                f"Removed {len(removed)} generated files:\n" + escape(UISection.bullets(removed)),
                style=UIStyle.GREEN.value,
            )
        )

    def render_validation(self, source: LoadedSource) -> None:
        counts = {
            "rules": len(source.rules),
            "commands": len(source.commands),
            "skills": len(source.skills),
            "agents": len(source.agents),
            "hooks": len(source.config.hooks),
        }
        summary = ", ".join(f"{value} {key}" for key, value in counts.items())
        targets = ", ".join(source.config.targets) or "none"
        self.console.print(
            UISection.note(
                "validate",
                f"[{UIStyle.GREEN.value}]✓ .agentrc/ is valid[/]\n{summary}\ntargets: {escape(targets)}",
                style=UIStyle.GREEN.value,
            )
        )

    def render_targets(self, adapters: list[IAdapter]) -> None:
        self.console.print(UISection.wrap("targets", TargetsTable.targets_table(adapters), style=UIStyle.BLUE.value))
