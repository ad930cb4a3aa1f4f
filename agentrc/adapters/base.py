"""Adapter contract: a pure translation from IR to one target's file set."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from agentrc.core.ir import IR


class FeatureCategory(str, Enum):
    INSTRUCTIONS = "instructions"
    SCOPED_RULES = "scoped-rules"
    DESCRIPTION_RULES = "description-triggered rules"
    MANUAL_RULES = "manual rules"
    HOOKS = "hooks"
    COMMANDS = "commands"
    SKILLS = "skills"
    AGENTS = "agents"


class Support(str, Enum):
    NATIVE = "native"
    DEGRADED = "degraded"
    OMITTED = "omitted"


class Ownership(str, Enum):
    """How the writer may treat a generated path on disk."""

    FULL = "full"
    SHARED_KEYS = "shared-keys"
    UNMARKED = "unmarked"


@dataclass(frozen=True)
class OutputFile:
    path: str
    content: str
    ownership: Ownership = Ownership.FULL


@dataclass(frozen=True)
class AdapterResult:
    files: tuple[OutputFile, ...] = ()
    warnings: tuple[str, ...] = ()
    native_features: tuple[str, ...] = ()
    degraded_features: tuple[str, ...] = ()

    def paths(self) -> list[str]:
        return [item.path for item in self.files]


@dataclass
class ResultBuilder:
    """Mutable accumulator used while an adapter runs; frozen on ``build``."""

    files: list[OutputFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    native_features: list[str] = field(default_factory=list)
    degraded_features: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def native(self, category: FeatureCategory) -> None:
        if category.value not in self.native_features:
            self.native_features.append(category.value)

    def degraded(self, category: FeatureCategory, detail: str) -> None:
        tag = f"{category.value} ({detail})"
        if tag not in self.degraded_features:
            self.degraded_features.append(tag)

    def build(self) -> AdapterResult:
        return AdapterResult(
            files=tuple(self.files),
            warnings=tuple(self.warnings),
            native_features=tuple(self.native_features),
            degraded_features=tuple(self.degraded_features),
        )


class IAdapter(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    def managed_dirs(self) -> tuple[str, ...]:
        """Directories whose stale generated files the writer may remove."""
        return ()

    @abstractmethod
    def generate(self, ir: IR) -> AdapterResult:
        """Return the target's files plus its native/degraded report."""
