from pathlib import Path
from typing import Callable, Dict

import pytest
from click.testing import CliRunner

from agentrc.core.ir import IR, Agent, Command, Hook, HookEvent, Priority, Rule, RuleScope, Skill


SAMPLE_CONFIG = """\
version: "1"
targets:
  - claude
  - cursor
hooks:
  - event: post-edit
    match: "**/*.ts"
    run: "prettier --write {file}"
    description: Format TypeScript
"""

SAMPLE_SOURCES: Dict[str, str] = {
    "config.yaml": SAMPLE_CONFIG,
    "rules/style.md": "---\nalwaysApply: true\npriority: critical\n---\n\nUse two-space indentation.\n",
    "rules/typescript.md": '---\nglobs: ["**/*.ts", "**/*.tsx"]\n---\n\nPrefer strict types.\n',
    "rules/testing.md": "---\ndescription: When writing tests\n---\n\nUse pytest fixtures.\n",
    "commands/deploy.md": "---\ndescription: Deploy the app\naliases: [ship]\n---\n\nRun the deploy script.\n",
    "skills/pdf-tools/SKILL.md": "---\ndescription: Work with PDFs\n---\n\nExtract text from PDFs.\n",
    "skills/pdf-tools/scripts/extract.py": "print('extract')\n",
    "agents/reviewer.md": "---\ndescription: Reviews code\nmodel: sonnet\ntools: [Read, Grep]\n---\n\nReview every diff.\n",
}


def _source_path(name: str) -> Path:
    return Path(".agentrc") / name


def make_rule(
    name: str,
    scope: RuleScope = RuleScope.ALWAYS,
    content: str = "",
    priority: Priority = Priority.NORMAL,
    globs=None,
    description=None,
) -> Rule:
    return Rule(
        name=name,
        scope=scope,
        content=content or f"Follow the {name} conventions.",
        source_path=_source_path(f"rules/{name}.md"),
        priority=priority,
        globs=tuple(globs) if globs is not None else None,
        description=description,
    )


def make_sample_ir() -> IR:
    return IR(
        rules=(
            make_rule("style", priority=Priority.CRITICAL, content="Use two-space indentation."),
            make_rule(
                "typescript",
                RuleScope.GLOB,
                content="Prefer strict types.",
                globs=["**/*.ts", "**/*.tsx"],
            ),
            make_rule(
                "testing",
                RuleScope.DESCRIPTION,
                content="Use pytest fixtures.",
                description="When writing tests",
            ),
            make_rule("release", RuleScope.MANUAL, content="Tag releases from main."),
        ),
        hooks=(
            Hook(
                event=HookEvent.POST_EDIT,
                run="prettier --write {file}",
                description="Format TypeScript",
                match="**/*.ts",
            ),
            Hook(event=HookEvent.PRE_COMMIT, run="hooks/lint.sh", description="Lint before commit"),
        ),
        commands=(
            Command(
                name="deploy",
                description="Deploy the app",
                content="Run the deploy script.",
                source_path=_source_path("commands/deploy.md"),
                aliases=("ship",),
            ),
        ),
        skills=(
            Skill(
                name="pdf-tools",
                description="Work with PDFs",
                content="Extract text from PDFs.",
                source_path=_source_path("skills/pdf-tools/SKILL.md"),
                files={"scripts/extract.py": "print('extract')\n"},
            ),
        ),
        agents=(
            Agent(
                name="reviewer",
                description="Reviews code",
                content="Review every diff.",
                source_path=_source_path("agents/reviewer.md"),
                model="sonnet",
                tools=("Read", "Grep"),
            ),
        ),
        targets=("claude", "cursor"),
    )


@pytest.fixture
def sample_ir() -> IR:
    return make_sample_ir()


@pytest.fixture
def write_sources() -> Callable[..., Path]:
    def _write(root: Path, files: Dict[str, str] | None = None) -> Path:
        source_dir = root / ".agentrc"
        for relative, content in (files if files is not None else SAMPLE_SOURCES).items():
            path = source_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return source_dir

    return _write


@pytest.fixture
def project(tmp_path: Path, write_sources) -> Path:
    write_sources(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
