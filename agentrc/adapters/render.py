"""Markdown renderers shared by every platform profile."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import yaml

from agentrc.core.ir import Agent, Command, Hook, Rule, Skill


def render_frontmatter(fields: dict[str, Any]) -> str:
    if not fields:
        return ""
    parts: list[str] = []
    parts.append("---")
    parts.append(yaml.dump(fields, default_flow_style=False, sort_keys=False).rstrip())
    parts.append("---")
    return "\n".join(parts)


def render_document(fields: dict[str, Any], body: str) -> str:
    """A markdown file: optional frontmatter, blank line, trimmed body."""
    header = render_frontmatter(fields)
    body = body.strip()
    if not header:
        return f"{body}\n"
    if not body:
        return f"{header}\n"
    return f"{header}\n\n{body}\n"


def join_sections(sections: Iterable[str]) -> str:
    text = "\n\n".join(section for section in sections if section).strip()
    return f"{text}\n" if text else ""


def render_plain_rule(rule: Rule) -> str:
    return f"### {rule.name}\n\n{rule.content}"


def render_glob_rule(rule: Rule) -> str:
    globs = ", ".join(rule.globs or ())
    return f"### {rule.name}\n\nWhen working on files matching `{globs}`:\n\n{rule.content}"


def render_description_rule(rule: Rule) -> str:
    suffix = f" ({rule.description})" if rule.description else ""
    return f"### {rule.name}{suffix}\n\n{rule.content}"


def _section(title: str, blocks: list[list[str]]) -> str:
    lines = [f"## {title}", ""]
    for block in blocks:
        lines.extend(block)
        lines.append("")
    return "\n".join(lines).rstrip()


def render_hooks_section(hooks: Iterable[Hook]) -> str:
    blocks: list[list[str]] = []
    for hook in hooks:
        match_info = f" on files matching `{hook.match}`" if hook.match else ""
        block = [f"### {hook.event.value}{match_info}", ""]
        block.append(hook.description or f"Run: `{hook.run}`")
        if hook.description and hook.run:
            block.extend(["", f"Command: `{hook.run}`"])
        blocks.append(block)
    return _section("Hooks", blocks)


def render_commands_section(commands: Iterable[Command]) -> str:
    blocks: list[list[str]] = []
    for command in commands:
        aliases = f" (aliases: {', '.join(command.aliases)})" if command.aliases else ""
        block = [f"### {command.name}{aliases}", ""]
        if command.description:
            block.extend([command.description, ""])
        block.append(command.content)
        blocks.append(block)
    return _section("Workflows", blocks)


def _fence_for(content: str) -> str:
    fence = "```"
    while fence in content:
        fence += "`"
    return fence


def render_skills_section(skills: Iterable[Skill]) -> str:
    blocks: list[list[str]] = []
    for skill in skills:
        block = [f"### {skill.name}", ""]
        if skill.description:
            block.extend([skill.description, ""])
        block.append(skill.content)
        for path, content in sorted(skill.files.items()):
            fence = _fence_for(content)
            block.extend(["", f"#### {path}", "", fence, content.rstrip("\n"), fence])
        blocks.append(block)
    return _section("Skills", blocks)


def render_agents_section(agents: Iterable[Agent]) -> str:
    blocks: list[list[str]] = []
    for agent in agents:
        block = [f"### {agent.name}", ""]
        if agent.description:
            block.extend([agent.description, ""])
        details: list[str] = []
        if agent.model:
            details.append(f"Model: `{agent.model}`")
        if agent.tools:
            details.append(f"Tools: {', '.join(agent.tools)}")
        if details:
            block.extend(["; ".join(details), ""])
        block.append(agent.content)
        blocks.append(block)
    return _section("Agents", blocks)


_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _is_control(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def _toml_escape(char: str) -> str:
    if char in _TOML_ESCAPES:
        return _TOML_ESCAPES[char]
    if _is_control(char):
        return f"\\u{ord(char):04X}"
    return char


def _toml_string(value: str) -> str:
    return '"' + "".join(_toml_escape(char) for char in value) + '"'


def _toml_multiline(value: str) -> str:
    # Literal strings hold no escapes, so ''' or a bare control char needs a basic string.
    if "'''" in value or any(_is_control(char) and char not in "\n\t" for char in value):
        return _toml_string(value)
    return f"'''\n{value}\n'''"


def render_toml_command(command: Command) -> str:
    lines: list[str] = []
    if command.description:
        lines.append(f"description = {_toml_string(command.description)}")
    lines.append(f"prompt = {_toml_multiline(command.content.strip())}")
    return "\n".join(lines) + "\n"
