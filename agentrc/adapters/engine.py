"""The rendering engine every platform adapter runs on."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from agentrc.adapters.base import (
    AdapterResult,
    FeatureCategory,
    IAdapter,
    OutputFile,
    Ownership,
    ResultBuilder,
    Support,
)
from agentrc.adapters.budget import RuleBlock
from agentrc.adapters.profiles import FieldValue, Fields, PlatformProfile, Treatment
from agentrc.adapters.render import (
    join_sections,
    render_agents_section,
    render_commands_section,
    render_description_rule,
    render_document,
    render_glob_rule,
    render_hooks_section,
    render_plain_rule,
    render_skills_section,
    render_toml_command,
)
from agentrc.constants import SKILL_FILENAME
from agentrc.core.ir import IR, Agent, Command, Rule, RuleScope, Skill

logger = logging.getLogger(__name__)

SCOPE_CATEGORIES: dict[RuleScope, FeatureCategory] = {
    RuleScope.ALWAYS: FeatureCategory.INSTRUCTIONS,
    RuleScope.GLOB: FeatureCategory.SCOPED_RULES,
    RuleScope.DESCRIPTION: FeatureCategory.DESCRIPTION_RULES,
    RuleScope.MANUAL: FeatureCategory.MANUAL_RULES,
}


def resolve_fields(fields: Fields, entity: Any) -> dict[str, Any]:
    """Frontmatter mapping for ``entity``; empty values are left out."""
    resolved: dict[str, Any] = {}
    for key, value in fields:
        if isinstance(value, FieldValue):
            value = _field_value(value, entity)
        if value is None or value == "" or value == []:
            continue
        resolved[key] = value
    return resolved


def _field_value(source: FieldValue, entity: Any) -> Any:
    if source == FieldValue.NAME:
        return entity.name
    if source == FieldValue.DESCRIPTION:
        return entity.description or None
    if source == FieldValue.DESCRIPTION_OR_NAME:
        return entity.description or entity.name
    if source == FieldValue.GLOBS_LIST:
        return list(entity.globs or [])
    if source == FieldValue.GLOBS_CSV:
        return ",".join(entity.globs or [])
    if source == FieldValue.MODEL:
        return entity.model
    if source == FieldValue.TOOLS_LIST:
        return list(entity.tools or [])
    if source == FieldValue.TOOLS_CSV:
        return ", ".join(entity.tools or [])
    raise ValueError(f"Unsupported frontmatter value: {source}")


@dataclass
class _Sections:
    """Markdown sections of the single instructions file, by placement order."""

    plain: list[str] = field(default_factory=list)
    scoped: list[str] = field(default_factory=list)
    described: list[str] = field(default_factory=list)
    aggregates: list[str] = field(default_factory=list)

    def rules(self) -> list[str]:
        return [*self.plain, *self.scoped, *self.described]


class ProfileAdapter(IAdapter):
    """Adapter whose behavior is fully described by a ``PlatformProfile``."""

    def __init__(self, profile: PlatformProfile) -> None:
        self.profile = profile

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def managed_dirs(self) -> tuple[str, ...]:
        return self.profile.managed_dirs

    def generate(self, ir: IR) -> AdapterResult:
        result = ResultBuilder()
        result.native(FeatureCategory.INSTRUCTIONS)
        sections = _Sections()

        blocks = self._render_rules(ir.rules, result, sections)
        feature_files = self._render_features(ir, result, sections)

        instructions: OutputFile | None = None
        aggregate: OutputFile | None = None
        if self.profile.conventions_path is None:
            content = join_sections([*sections.rules(), *sections.aggregates])
            if content and self.profile.instructions_path:
                instructions = OutputFile(self.profile.instructions_path, content)
        else:
            content = join_sections(sections.rules())
            if content and self.profile.instructions_path:
                instructions = OutputFile(self.profile.instructions_path, content)
            body = join_sections(sections.aggregates)
            if body:
                aggregate = OutputFile(
                    self.profile.conventions_path,
                    render_document(dict(self.profile.conventions_fields), body),
                )

        allocation = self.profile.allocator.allocate(blocks, aggregate)
        for warning in allocation.warnings:
            result.warn(warning)

        result.files.extend(allocation.files)
        if instructions is not None:
            result.files.append(instructions)
        result.files.extend(feature_files)
        logger.debug("%s produced %d files", self.name, len(result.files))
        return result.build()

    def _render_rules(
        self, rules: tuple[Rule, ...], result: ResultBuilder, sections: _Sections
    ) -> list[RuleBlock]:
        blocks: list[RuleBlock] = []
        for rule in rules:
            treatment = self.profile.rules[rule.scope]
            self._tag(result, SCOPE_CATEGORIES[rule.scope], treatment)
            if treatment.path is not None:
                name = self.profile.ordering.file_name(rule, len(blocks))
                content = render_document(resolve_fields(treatment.fields, rule), rule.content)
                blocks.append(RuleBlock(rule, OutputFile(treatment.path.format(name=name), content)))
            elif rule.scope == RuleScope.GLOB:
                sections.scoped.append(render_glob_rule(rule))
            elif rule.scope == RuleScope.DESCRIPTION:
                sections.described.append(render_description_rule(rule))
            else:
                sections.plain.append(render_plain_rule(rule))
        return blocks

    def _render_features(
        self, ir: IR, result: ResultBuilder, sections: _Sections
    ) -> list[OutputFile]:
        files: list[OutputFile] = []

        if ir.hooks:
            treatment = self.profile.hooks
            self._tag(result, FeatureCategory.HOOKS, treatment)
            if treatment.support == Support.NATIVE and self.profile.hook_emitter is not None:
                files.extend(self.profile.hook_emitter.emit(ir.hooks))
            elif treatment.support == Support.DEGRADED:
                sections.aggregates.append(render_hooks_section(ir.hooks))

        if ir.commands:
            treatment = self.profile.commands
            self._tag(result, FeatureCategory.COMMANDS, treatment)
            if treatment.support == Support.NATIVE:
                files.extend(self._command_file(command, treatment) for command in ir.commands)
            elif treatment.support == Support.DEGRADED:
                sections.aggregates.append(render_commands_section(ir.commands))

        if ir.skills:
            treatment = self.profile.skills
            self._tag(result, FeatureCategory.SKILLS, treatment)
            if treatment.support == Support.NATIVE:
                for skill in ir.skills:
                    files.extend(self._skill_files(skill, treatment))
            elif treatment.support == Support.DEGRADED:
                sections.aggregates.append(render_skills_section(ir.skills))

        if ir.agents:
            treatment = self.profile.agents
            self._tag(result, FeatureCategory.AGENTS, treatment)
            if treatment.support == Support.NATIVE:
                files.extend(self._agent_file(agent, treatment) for agent in ir.agents)
            elif treatment.support == Support.DEGRADED:
                sections.aggregates.append(render_agents_section(ir.agents))

        return files

    @staticmethod
    def _tag(result: ResultBuilder, category: FeatureCategory, treatment: Treatment) -> None:
        if treatment.support == Support.NATIVE:
            result.native(category)
        elif treatment.support == Support.DEGRADED:
            result.degraded(category, treatment.detail or "folded into instructions")

    @staticmethod
    def _command_file(command: Command, treatment: Treatment) -> OutputFile:
        path = treatment.path.format(name=command.name)
        if path.endswith(".toml"):
            return OutputFile(path, render_toml_command(command))
        return OutputFile(
            path, render_document(resolve_fields(treatment.fields, command), command.content)
        )

    @staticmethod
    def _skill_files(skill: Skill, treatment: Treatment) -> list[OutputFile]:
        directory = treatment.path.format(name=skill.name)
        fields: dict[str, Any] = {"name": skill.name}
        if skill.description:
            fields["description"] = skill.description
        fields.update(resolve_fields(treatment.fields, skill))
        files = [OutputFile(f"{directory}/{SKILL_FILENAME}", render_document(fields, skill.content))]
        for relative, content in sorted(skill.files.items()):
            files.append(OutputFile(f"{directory}/{relative}", content, Ownership.UNMARKED))
        return files

    @staticmethod
    def _agent_file(agent: Agent, treatment: Treatment) -> OutputFile:
        return OutputFile(
            treatment.path.format(name=agent.name),
            render_document(resolve_fields(treatment.fields, agent), agent.content),
        )
