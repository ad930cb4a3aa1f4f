"""Pluggable behaviors a platform profile can hand to the rendering engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from agentrc.adapters.base import OutputFile, Ownership
from agentrc.core.ir import Hook, Rule
from agentrc.hooks.compiler import compile_hooks
from agentrc.utils import dump_json


class IRuleOrdering(ABC):
    @abstractmethod
    def file_name(self, rule: Rule, position: int) -> str:
        """Name substituted into the rule path template; ``position`` is 0-based."""


class SourceOrdering(IRuleOrdering):
    def file_name(self, rule: Rule, position: int) -> str:
        return rule.name


class NumberedPrefixOrdering(IRuleOrdering):
    """``01-name``, ``02-name``... so a directory listing follows priority.

    Numbering starts at ``start``; lower numbers stay free for aggregate files.
    """

    def __init__(self, start: int = 1, width: int = 2) -> None:
        self.start = start
        self.width = width

    def file_name(self, rule: Rule, position: int) -> str:
        return f"{position + self.start:0{self.width}d}-{rule.name}"


class IHookEmitter(ABC):
    @abstractmethod
    def emit(self, hooks: Sequence[Hook]) -> list[OutputFile]:
        raise NotImplementedError


class SettingsHookEmitter(IHookEmitter):
    """Hooks compiled into a settings document shared with the user."""

    def __init__(self, path: str) -> None:
        self.path = path

    def emit(self, hooks: Sequence[Hook]) -> list[OutputFile]:
        payload = compile_hooks(hooks)
        if not payload:
            return []
        return [
            OutputFile(path=self.path, content=dump_json(payload), ownership=Ownership.SHARED_KEYS)
        ]
