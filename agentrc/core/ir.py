"""IR data models: the normalized, platform-agnostic view of a source tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RuleScope(str, Enum):
    ALWAYS = "always"
    GLOB = "glob"
    DESCRIPTION = "description"
    MANUAL = "manual"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK: dict[Priority, int] = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.NORMAL: 2,
    Priority.LOW: 3,
}


class HookEvent(str, Enum):
    POST_EDIT = "post-edit"
    POST_CREATE = "post-create"
    PRE_COMMIT = "pre-commit"


@dataclass(frozen=True)
class Rule:
    name: str
    scope: RuleScope
    content: str
    source_path: Path
    priority: Priority = Priority.NORMAL
    globs: tuple[str, ...] | None = None
    description: str | None = None


@dataclass(frozen=True)
class Hook:
    event: HookEvent
    run: str
    description: str = ""
    match: str | None = None


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    content: str
    source_path: Path
    aliases: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Skill:
    name: str
    description: str
    content: str
    source_path: Path
    files: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Agent:
    name: str
    description: str
    content: str
    source_path: Path
    model: str | None = None
    tools: tuple[str, ...] | None = None


@dataclass(frozen=True)
class IR:
    rules: tuple[Rule, ...] = ()
    hooks: tuple[Hook, ...] = ()
    commands: tuple[Command, ...] = ()
    skills: tuple[Skill, ...] = ()
    agents: tuple[Agent, ...] = ()
    targets: tuple[str, ...] = ()
