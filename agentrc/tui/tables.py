from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from agentrc.adapters.base import AdapterResult, IAdapter
from agentrc.output.models import Action, BuildReport, TargetReport
from agentrc.tui.enums import ACTION_STATUS_STYLE, UIStyle


class FeatureTable:
    @staticmethod
    def features_table(result: AdapterResult) -> Table:
        table = Table(
            Column(header="Support", width=10),
            Column(header="Feature", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for feature in result.native_features:
            table.add_row(f"[{UIStyle.GREEN.value}]native[/{UIStyle.GREEN.value}]", escape(feature))
        for feature in result.degraded_features:
            table.add_row(
                f"[{UIStyle.YELLOW.value}]degraded[/{UIStyle.YELLOW.value}]", escape(feature)
            )
        return table

    @staticmethod
    def files_table(result: AdapterResult) -> Table:
        table = Table(
            Column(header="File", overflow="fold"),
            Column(header="Lines", width=8, justify="right"),
            expand=True,
            header_style="bold",
        )
        for item in result.files:
            table.add_row(escape(item.path), str(len(item.content.splitlines())))
        return table


class PlanTable:
    @staticmethod
    def summary_block(reports: list[TargetReport], mode: str):
        actions = [action for report in reports if report.plan for action in report.plan.actions]
        counts = Counter(action.status.value for action in actions)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Targets", ", ".join(report.target for report in reports) or "none")
        table.add_row("Files", str(len(actions)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def actions_table(actions: list[Action]) -> Table:
        table = Table(
            Column(header="Target", width=16),
            Column(header="Status", width=10),
            Column(header="Path", overflow="ellipsis", max_width=58),
            Column(header="Reason", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )

        for action in actions:
            status_style = ACTION_STATUS_STYLE.get(action.status, UIStyle.WHITE.value)
            status_text = f"[{status_style}]{action.status.value}[/{status_style}]"
            table.add_row(
                action.target or "", status_text, escape(action.relative), escape(action.detail)
            )
        return table


class BuildTable:
    @staticmethod
    def stats_table(build: BuildReport) -> Table:
        summary = build.summary()
        table = Table(show_header=False, box=None)
        for key in ("targets", "create", "update", "noop", "remove", "backups", "failed"):
            table.add_row(f"[bold]{key}[/bold]", str(summary.get(key, 0)))
        return table


class TargetsTable:
    @staticmethod
    def targets_table(adapters: list[IAdapter]) -> Table:
        table = Table(
            Column(header="Target", width=18),
            Column(header="Managed directories", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for adapter in adapters:
            managed = ", ".join(adapter.managed_dirs) or "-"
            table.add_row(adapter.name, escape(managed))
        return table
