"""Normalize a LoadedSource into the IR."""

from __future__ import annotations

from collections.abc import Iterable

from agentrc.core.ir import IR, Agent, Command, Rule, RuleScope, Skill
from agentrc.core.source import LoadedSource, ParsedFrontmatter, SourceDocument


def determine_scope(frontmatter: ParsedFrontmatter) -> RuleScope:
    """Resolve a rule's activation scope; first matching case wins.

    1. ``alwaysApply: true``  -> always
    2. ``manual: true``       -> manual
    3. non-empty globs        -> glob
    4. non-empty description  -> description
    5. ``alwaysApply: false`` -> manual
    6. nothing set            -> always
    """
    if frontmatter.always_apply is True:
        return RuleScope.ALWAYS
    if frontmatter.manual is True:
        return RuleScope.MANUAL
    if frontmatter.globs:
        return RuleScope.GLOB
    if frontmatter.description:
        return RuleScope.DESCRIPTION
    if frontmatter.always_apply is False:
        return RuleScope.MANUAL
    return RuleScope.ALWAYS


def sort_by_priority(rules: Iterable[Rule]) -> list[Rule]:
    # sorted() is stable, so equal priorities keep source order.
    return sorted(rules, key=lambda rule: rule.priority.rank)


def _optional_tuple(values: list[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    return tuple(values)


def build_rule(document: SourceDocument) -> Rule:
    fm = document.parsed.frontmatter
    return Rule(
        name=document.name,
        scope=determine_scope(fm),
        content=document.parsed.content,
        source_path=document.source_path,
        priority=fm.priority,
        globs=_optional_tuple(fm.globs),
        description=fm.description,
    )


def build_command(document: SourceDocument) -> Command:
    fm = document.parsed.frontmatter
    return Command(
        name=document.name,
        description=fm.description or "",
        content=document.parsed.content,
        source_path=document.source_path,
        aliases=_optional_tuple(fm.aliases),
    )


def build_agent(document: SourceDocument) -> Agent:
    fm = document.parsed.frontmatter
    return Agent(
        name=document.name,
        description=fm.description or "",
        content=document.parsed.content,
        source_path=document.source_path,
        model=fm.model,
        tools=_optional_tuple(fm.tools),
    )


def build_ir(source: LoadedSource) -> IR:
    rules = sort_by_priority(build_rule(document) for document in source.rules)
    skills = tuple(
        Skill(
            name=skill.name,
            description=skill.description,
            content=skill.content,
            source_path=skill.source_path,
            files=dict(skill.files),
        )
        for skill in source.skills
    )
    return IR(
        rules=tuple(rules),
        hooks=tuple(source.config.hooks),
        commands=tuple(build_command(document) for document in source.commands),
        skills=skills,
        agents=tuple(build_agent(document) for document in source.agents),
        targets=tuple(source.config.targets),
    )
