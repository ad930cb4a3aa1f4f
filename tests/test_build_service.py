from pathlib import Path

import pytest

from agentrc.adapters.base import AdapterResult, IAdapter, OutputFile
from agentrc.adapters.registry import AdapterRegistry
from agentrc.build_service import BuildService, parse_target_list
from agentrc.core.ir import IR
from agentrc.errors import AdapterNotFoundError
from agentrc.output.models import WriteState


class _ExplodingAdapter(IAdapter):
    @property
    def name(self) -> str:
        return "claude"

    def generate(self, ir: IR) -> AdapterResult:
        raise RuntimeError("boom")


class _SingleFileAdapter(IAdapter):
    @property
    def name(self) -> str:
        return "cursor"

    def generate(self, ir: IR) -> AdapterResult:
        body = "\n".join(rule.name for rule in ir.rules)
        return AdapterResult(files=(OutputFile("RULES.md", body + "\n"),))


def _service(root: Path) -> BuildService:
    return BuildService(root, registry=AdapterRegistry([_ExplodingAdapter(), _SingleFileAdapter()]))


def test_parse_target_list():
    assert parse_target_list(None) == []
    assert parse_target_list("") == []
    assert parse_target_list(" claude, ,cursor ") == ["claude", "cursor"]


def test_generation_failure_is_isolated(project: Path):
    build = _service(project).build()

    failed, healthy = build.targets
    assert failed.error == "Failed to generate for claude: boom"
    assert healthy.ok
    assert build.state == WriteState.PARTIAL_FAILURE
    assert (project / "RULES.md").read_text(encoding="utf-8").endswith("style\ntesting\ntypescript\n")


def test_override_wins_and_duplicates_collapse(project: Path):
    build = _service(project).build(["cursor", "cursor"])

    assert [report.target for report in build.targets] == ["cursor"]
    assert build.ok


def test_unknown_override_is_fatal(project: Path):
    with pytest.raises(AdapterNotFoundError):
        _service(project).build(["cursor", "nope"])

    assert not (project / "RULES.md").exists()


def test_ignored_paths_skip_shared_files(project: Path):
    service = BuildService(project)
    service.build(["claude"])

    ignored = service.ignored_paths()

    assert ".claude/rules/style.md" in ignored
    assert ".claude/settings.json" not in ignored


def test_inspect_generates_without_writing(project: Path):
    report = BuildService(project).inspect("gemini")

    assert report.ok
    assert "GEMINI.md" in report.result.paths()
    assert not (project / "GEMINI.md").exists()
