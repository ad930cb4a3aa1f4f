import logging
from pathlib import Path
from typing import Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from agentrc import __version__
from agentrc.build_service import BuildService, parse_target_list
from agentrc.errors import AgentrcError, ConfigError
from agentrc.tui import BuildConsoleUI


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _service_from_obj(obj: Dict[str, object]) -> BuildService:
    return BuildService(root=Path(str(obj["root"])))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-C",
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project root containing .agentrc/.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="agentrc")
@click.pass_context
def cli(ctx: click.Context, root: Path, verbose: bool) -> None:
    """Transpile .agentrc/ into native config for every AI coding tool."""
    _configure_logging(verbose)
    ctx.obj = {"root": root.resolve(), "verbose": verbose}


@cli.command(help="Generate target files from .agentrc/.")
@click.option("--targets", "targets", default=None, help="Comma-separated targets (overrides config).")
@click.option("--dry-run", is_flag=True, help="Show what would be written without writing.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_obj
def build(obj: Dict[str, object], targets: Optional[str], dry_run: bool, verbose: bool) -> None:
    if verbose:
        _configure_logging(True)
    ui = BuildConsoleUI(Console())
    service = _service_from_obj(obj)
    ui.render_loading(str(service.root))

    try:
        report = service.build(parse_target_list(targets), dry_run=dry_run)
    except ConfigError as exc:
        raise click.ClickException(str(exc))

    if not report.targets:
        ui.render_no_targets()
        return
    if dry_run:
        ui.render_dry_run(report)
    else:
        ui.render_build_result(report)

    if not report.ok:
        raise click.exceptions.Exit(1)


@cli.command(help="Remove generated files tracked in the manifest.")
@click.pass_obj
def clean(obj: Dict[str, object]) -> None:
    ui = BuildConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        removed = service.clean()
    except AgentrcError as exc:
        raise click.ClickException(str(exc))
    ui.render_clean(removed)


@cli.command(help="Show how one platform receives the current sources.")
@click.argument("platform")
@click.pass_obj
def inspect(obj: Dict[str, object], platform: str) -> None:
    ui = BuildConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        report = service.inspect(platform)
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    ui.render_inspect(report)
    if not report.ok:
        raise click.exceptions.Exit(1)


@cli.command(help="Validate .agentrc/ sources and config.")
@click.pass_obj
def validate(obj: Dict[str, object]) -> None:
    ui = BuildConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        source = service.load()
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    ui.render_validation(source)


@cli.command(help="List registered targets.")
@click.pass_obj
def targets(obj: Dict[str, object]) -> None:
    ui = BuildConsoleUI(Console())
    service = _service_from_obj(obj)
    ui.render_targets(service.registry.adapters())


def main() -> int:
    try:
        # Without standalone mode click returns the exit code instead of raising.
        result = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
