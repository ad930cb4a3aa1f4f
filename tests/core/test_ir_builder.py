import itertools
from pathlib import Path

import pytest

from agentrc.core.builder import build_ir, determine_scope, sort_by_priority
from agentrc.core.ir import HookEvent, Priority, Rule, RuleScope
from agentrc.core.loader import load_agentrc
from agentrc.core.source import ParsedFrontmatter


def _make_rule(name: str, priority: Priority = Priority.NORMAL) -> Rule:
    return Rule(
        name=name,
        scope=RuleScope.ALWAYS,
        content=name,
        source_path=Path(f"{name}.md"),
        priority=priority,
    )


def _expected_scope(always_apply, manual, globs, description) -> RuleScope:
    if always_apply is True:
        return RuleScope.ALWAYS
    if manual is True:
        return RuleScope.MANUAL
    if globs:
        return RuleScope.GLOB
    if description:
        return RuleScope.DESCRIPTION
    if always_apply is False:
        return RuleScope.MANUAL
    return RuleScope.ALWAYS


@pytest.mark.parametrize(
    "always_apply,manual,globs,description",
    list(
        itertools.product(
            [True, False, None],
            [True, False, None],
            [["*.ts"], [], None],
            ["Use when testing", "", None],
        )
    ),
)
def test_determine_scope_covers_every_combination(always_apply, manual, globs, description):
    fm = ParsedFrontmatter(
        always_apply=always_apply, manual=manual, globs=globs, description=description
    )
    assert determine_scope(fm) == _expected_scope(always_apply, manual, globs, description)


def test_determine_scope_named_cases():
    assert determine_scope(ParsedFrontmatter()) == RuleScope.ALWAYS
    assert determine_scope(ParsedFrontmatter(always_apply=True, globs=["*.ts"])) == RuleScope.ALWAYS
    assert determine_scope(ParsedFrontmatter(manual=True, globs=["*.ts"])) == RuleScope.MANUAL
    assert determine_scope(ParsedFrontmatter(globs=["*.ts"], description="x")) == RuleScope.GLOB
    assert determine_scope(ParsedFrontmatter(globs=[], description="x")) == RuleScope.DESCRIPTION
    assert determine_scope(ParsedFrontmatter(always_apply=False)) == RuleScope.MANUAL


def test_sort_by_priority_is_stable_within_a_rank():
    rules = [
        _make_rule("a", Priority.LOW),
        _make_rule("b", Priority.NORMAL),
        _make_rule("c", Priority.CRITICAL),
        _make_rule("d", Priority.NORMAL),
        _make_rule("e", Priority.HIGH),
        _make_rule("f", Priority.CRITICAL),
    ]

    ordered = sort_by_priority(rules)

    assert [rule.name for rule in ordered] == ["c", "f", "e", "b", "d", "a"]


def test_sort_by_priority_is_idempotent():
    rules = [_make_rule(name, priority) for name, priority in zip("abcd", list(Priority)[::-1])]

    once = sort_by_priority(rules)
    assert sort_by_priority(once) == once


def test_build_ir_from_source_tree(project: Path):
    ir = build_ir(load_agentrc(project))

    assert [rule.name for rule in ir.rules] == ["style", "testing", "typescript"]
    by_name = {rule.name: rule for rule in ir.rules}
    assert by_name["style"].scope == RuleScope.ALWAYS
    assert by_name["typescript"].scope == RuleScope.GLOB
    assert by_name["typescript"].globs == ("**/*.ts", "**/*.tsx")
    assert by_name["testing"].scope == RuleScope.DESCRIPTION
    assert by_name["testing"].description == "When writing tests"

    assert ir.targets == ("claude", "cursor")
    assert ir.hooks[0].event == HookEvent.POST_EDIT
    assert ir.hooks[0].match == "**/*.ts"
    assert ir.commands[0].aliases == ("ship",)
    assert ir.agents[0].tools == ("Read", "Grep")
    assert ir.skills[0].files == {"scripts/extract.py": "print('extract')\n"}


def test_build_ir_leaves_missing_optionals_as_none(tmp_path: Path, write_sources):
    write_sources(
        tmp_path,
        {
            "config.yaml": 'version: "1"\n',
            "commands/plain.md": "Just do it.\n",
            "agents/helper.md": "Help out.\n",
        },
    )

    ir = build_ir(load_agentrc(tmp_path))

    assert ir.rules == ()
    assert ir.hooks == ()
    assert ir.commands[0].description == ""
    assert ir.commands[0].aliases is None
    assert ir.agents[0].model is None
    assert ir.agents[0].tools is None
