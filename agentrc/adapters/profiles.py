"""Declarative capability table: one row per target platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from agentrc.adapters.base import FeatureCategory, Support
from agentrc.adapters.budget import BudgetAllocator, IRuleAllocator, UnboundedAllocator
from agentrc.adapters.strategies import (
    IHookEmitter,
    IRuleOrdering,
    NumberedPrefixOrdering,
    SettingsHookEmitter,
    SourceOrdering,
)
from agentrc.core.ir import RuleScope


class FieldValue(str, Enum):
    """Frontmatter values resolved from the entity being rendered."""

    NAME = "name"
    DESCRIPTION = "description"
    DESCRIPTION_OR_NAME = "description-or-name"
    GLOBS_LIST = "globs-list"
    GLOBS_CSV = "globs-csv"
    MODEL = "model"
    TOOLS_LIST = "tools-list"
    TOOLS_CSV = "tools-csv"


Fields = tuple[tuple[str, Any], ...]


@dataclass(frozen=True)
class Treatment:
    """How one feature category (or one rule scope) lands on a platform.

    ``path`` is a file template; ``None`` folds the item into a markdown
    section instead. ``detail`` explains a degraded rendering in the report.
    """

    support: Support
    path: str | None = None
    fields: Fields = ()
    detail: str | None = None


OMITTED: Final[Treatment] = Treatment(Support.OMITTED)


def native(path: str | None = None, fields: Fields = ()) -> Treatment:
    return Treatment(Support.NATIVE, path=path, fields=fields)


def degraded(detail: str, path: str | None = None, fields: Fields = ()) -> Treatment:
    return Treatment(Support.DEGRADED, path=path, fields=fields, detail=detail)


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    rules: dict[RuleScope, Treatment]
    hooks: Treatment
    commands: Treatment
    skills: Treatment
    agents: Treatment
    instructions_path: str | None = None
    conventions_path: str | None = None
    conventions_fields: Fields = ()
    managed_dirs: tuple[str, ...] = ()
    hook_emitter: IHookEmitter | None = None
    ordering: IRuleOrdering = field(default_factory=SourceOrdering)
    allocator: IRuleAllocator = field(default_factory=UnboundedAllocator)

    def treatment_for(self, category: FeatureCategory) -> Treatment:
        return {
            FeatureCategory.HOOKS: self.hooks,
            FeatureCategory.COMMANDS: self.commands,
            FeatureCategory.SKILLS: self.skills,
            FeatureCategory.AGENTS: self.agents,
        }[category]

    @property
    def omitted(self) -> frozenset[FeatureCategory]:
        categories = (
            FeatureCategory.HOOKS,
            FeatureCategory.COMMANDS,
            FeatureCategory.SKILLS,
            FeatureCategory.AGENTS,
        )
        return frozenset(
            category
            for category in categories
            if self.treatment_for(category).support == Support.OMITTED
        )


FOLDED: Final[str] = "folded into instructions"
ALWAYS_ON: Final[str] = "converted to always-on rules"
CONVENTIONS: Final[str] = "folded into conventions file"


def _single_file_profile(
    name: str,
    instructions_path: str,
    glob_detail: str = "folded into instructions with file-match annotations",
    **overrides: Any,
) -> PlatformProfile:
    options: dict[str, Any] = {
        "rules": {
            RuleScope.ALWAYS: native(),
            RuleScope.GLOB: degraded(glob_detail),
            RuleScope.DESCRIPTION: degraded(FOLDED),
            RuleScope.MANUAL: degraded(FOLDED),
        },
        "hooks": degraded("folded into behavioral instructions"),
        "commands": degraded("folded into workflows section"),
        "skills": degraded("folded into skills section"),
        "agents": degraded("folded into agents section"),
        "instructions_path": instructions_path,
    }
    options.update(overrides)
    return PlatformProfile(name=name, **options)


def _claude() -> PlatformProfile:
    rule_path = ".claude/rules/{name}.md"
    return PlatformProfile(
        name="claude",
        rules={
            RuleScope.ALWAYS: native(rule_path),
            RuleScope.GLOB: native(rule_path, (("paths", FieldValue.GLOBS_LIST),)),
            RuleScope.DESCRIPTION: degraded(ALWAYS_ON, rule_path),
            RuleScope.MANUAL: degraded(ALWAYS_ON, rule_path),
        },
        hooks=native(),
        commands=native(
            ".claude/commands/{name}.md", (("description", FieldValue.DESCRIPTION),)
        ),
        skills=native(".claude/skills/{name}"),
        agents=native(
            ".claude/agents/{name}.md",
            (
                ("name", FieldValue.NAME),
                ("description", FieldValue.DESCRIPTION_OR_NAME),
                ("model", FieldValue.MODEL),
                ("tools", FieldValue.TOOLS_CSV),
            ),
        ),
        managed_dirs=(".claude/rules", ".claude/commands", ".claude/skills", ".claude/agents"),
        hook_emitter=SettingsHookEmitter(".claude/settings.json"),
    )


def _cursor() -> PlatformProfile:
    rule_path = ".cursor/rules/{name}.mdc"
    return PlatformProfile(
        name="cursor",
        rules={
            RuleScope.ALWAYS: native(rule_path, (("alwaysApply", True),)),
            RuleScope.GLOB: native(
                rule_path, (("globs", FieldValue.GLOBS_CSV), ("alwaysApply", False))
            ),
            RuleScope.DESCRIPTION: native(
                rule_path,
                (("description", FieldValue.DESCRIPTION_OR_NAME), ("alwaysApply", False)),
            ),
            RuleScope.MANUAL: native(rule_path, (("alwaysApply", False),)),
        },
        hooks=OMITTED,
        commands=native(".cursor/commands/{name}.md"),
        skills=native(".cursor/skills/{name}"),
        agents=native(
            ".cursor/agents/{name}.md",
            (
                ("name", FieldValue.NAME),
                ("description", FieldValue.DESCRIPTION),
                ("model", FieldValue.MODEL),
            ),
        ),
        managed_dirs=(".cursor/rules", ".cursor/commands", ".cursor/skills", ".cursor/agents"),
    )


def _copilot() -> PlatformProfile:
    return _single_file_profile(
        "copilot",
        ".github/copilot-instructions.md",
        rules={
            RuleScope.ALWAYS: native(),
            RuleScope.GLOB: native(
                ".github/instructions/{name}.instructions.md",
                (("applyTo", FieldValue.GLOBS_CSV),),
            ),
            RuleScope.DESCRIPTION: degraded(FOLDED),
            RuleScope.MANUAL: degraded(FOLDED),
        },
        hooks=OMITTED,
        managed_dirs=(".github/instructions",),
    )


def _windsurf() -> PlatformProfile:
    rule_path = ".windsurf/rules/{name}.md"
    return PlatformProfile(
        name="windsurf",
        rules={
            RuleScope.ALWAYS: native(rule_path, (("trigger", "always_on"),)),
            RuleScope.GLOB: native(
                rule_path, (("trigger", "glob"), ("globs", FieldValue.GLOBS_CSV))
            ),
            RuleScope.DESCRIPTION: native(
                rule_path,
                (("trigger", "model"), ("description", FieldValue.DESCRIPTION_OR_NAME)),
            ),
            RuleScope.MANUAL: native(rule_path, (("trigger", "manual"),)),
        },
        hooks=degraded(CONVENTIONS),
        commands=native(
            ".windsurf/workflows/{name}.md", (("description", FieldValue.DESCRIPTION),)
        ),
        skills=degraded(CONVENTIONS),
        agents=degraded(CONVENTIONS),
        conventions_path=".windsurf/rules/agentrc-conventions.md",
        conventions_fields=(("trigger", "always_on"),),
        managed_dirs=(".windsurf/rules", ".windsurf/workflows"),
        allocator=BudgetAllocator("windsurf"),
    )


def _cline() -> PlatformProfile:
    rule_path = ".clinerules/{name}.md"
    return PlatformProfile(
        name="cline",
        rules={
            RuleScope.ALWAYS: native(rule_path),
            RuleScope.GLOB: native(rule_path, (("paths", FieldValue.GLOBS_LIST),)),
            RuleScope.DESCRIPTION: degraded(ALWAYS_ON, rule_path),
            RuleScope.MANUAL: degraded(ALWAYS_ON, rule_path),
        },
        hooks=degraded(CONVENTIONS),
        commands=degraded(CONVENTIONS),
        skills=degraded(CONVENTIONS),
        agents=degraded(CONVENTIONS),
        conventions_path=".clinerules/00-agentrc-conventions.md",
        managed_dirs=(".clinerules",),
        ordering=NumberedPrefixOrdering(start=1),
    )


def _gemini() -> PlatformProfile:
    return _single_file_profile(
        "gemini",
        "GEMINI.md",
        glob_detail="folded into instructions with file-match prefix",
        hooks=OMITTED,
        commands=native(".gemini/commands/{name}.toml"),
        skills=native(".gemini/skills/{name}"),
        managed_dirs=(".gemini/commands", ".gemini/skills"),
    )


def _codex() -> PlatformProfile:
    return _single_file_profile(
        "codex",
        "AGENTS.md",
        glob_detail="folded into instructions with file-path annotations",
        skills=native(".agents/skills/{name}"),
        managed_dirs=(".agents/skills",),
    )


def default_profiles() -> list[PlatformProfile]:
    """Every supported platform, in registration order."""
    return [
        _claude(),
        _cursor(),
        _copilot(),
        _windsurf(),
        _cline(),
        _gemini(),
        _codex(),
        _single_file_profile("generic-markdown", "AGENTS.md"),
        _single_file_profile("aider", "CONVENTIONS.md"),
        _single_file_profile("junie", ".junie/guidelines.md"),
        _single_file_profile("amazonq", ".amazonq/rules/agentrc.md"),
        _single_file_profile("amp", "AGENTS.md"),
        _single_file_profile("roo", "AGENTS.md"),
    ]


PROFILE_NAMES: Final[tuple[str, ...]] = tuple(profile.name for profile in default_profiles())
