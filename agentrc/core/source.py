"""Loaded source data: what the loader produces and the IR builder consumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from agentrc.core.ir import Hook, Priority


@dataclass(frozen=True)
class ParsedFrontmatter:
    globs: list[str] | None = None
    always_apply: bool | None = None
    manual: bool | None = None
    description: str | None = None
    priority: Priority = Priority.NORMAL
    aliases: list[str] | None = None
    model: str | None = None
    tools: list[str] | None = None


@dataclass(frozen=True)
class ParsedMarkdown:
    frontmatter: ParsedFrontmatter
    content: str


@dataclass(frozen=True)
class SourceDocument:
    name: str
    parsed: ParsedMarkdown
    source_path: Path


@dataclass(frozen=True)
class SkillSource:
    name: str
    description: str
    content: str
    source_path: Path
    files: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AgentrcConfig:
    version: str
    targets: list[str] = field(default_factory=list)
    hooks: list[Hook] = field(default_factory=list)


@dataclass(frozen=True)
class LoadedSource:
    config: AgentrcConfig
    rules: list[SourceDocument] = field(default_factory=list)
    commands: list[SourceDocument] = field(default_factory=list)
    skills: list[SkillSource] = field(default_factory=list)
    agents: list[SourceDocument] = field(default_factory=list)
