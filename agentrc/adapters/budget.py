"""Greedy priority-ordered selection under a two-tier character budget."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from agentrc.adapters.base import OutputFile, Ownership
from agentrc.constants import RULE_CHAR_LIMIT, TOTAL_CHAR_LIMIT
from agentrc.core.ir import Rule
from agentrc.output.markers import add_marker

logger = logging.getLogger(__name__)


def rendered_size(file: OutputFile) -> int:
    """Characters ``file`` occupies on disk, generated marker included."""
    if file.ownership == Ownership.FULL:
        return len(add_marker(file.path, file.content))
    return len(file.content)


@dataclass(frozen=True)
class RuleBlock:
    rule: Rule
    file: OutputFile

    @property
    def size(self) -> int:
        return rendered_size(self.file)


@dataclass
class Allocation:
    files: list[OutputFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total: int = 0


class IRuleAllocator(ABC):
    @abstractmethod
    def allocate(
        self, blocks: list[RuleBlock], aggregate: OutputFile | None = None
    ) -> Allocation:
        """Choose which rule files (and the aggregate file) are emitted."""


class UnboundedAllocator(IRuleAllocator):
    def allocate(
        self, blocks: list[RuleBlock], aggregate: OutputFile | None = None
    ) -> Allocation:
        files = [block.file for block in blocks]
        if aggregate is not None:
            files.append(aggregate)
        return Allocation(files=files)


class BudgetAllocator(IRuleAllocator):
    """Keep rule blocks in priority order until the total budget runs out.

    An oversized block is kept with a warning. A block that would push the
    running total past ``total_limit`` is dropped with a warning naming it.
    The aggregate block is checked last and always kept.
    """

    def __init__(
        self,
        target: str,
        item_limit: int = RULE_CHAR_LIMIT,
        total_limit: int = TOTAL_CHAR_LIMIT,
    ) -> None:
        self.target = target
        self.item_limit = item_limit
        self.total_limit = total_limit

    def allocate(
        self, blocks: list[RuleBlock], aggregate: OutputFile | None = None
    ) -> Allocation:
        allocation = Allocation()
        ordered = sorted(blocks, key=lambda block: block.rule.priority.rank)
        for block in ordered:
            if block.size > self.item_limit:
                allocation.warnings.append(
                    f'Rule "{block.rule.name}" is {block.size} chars, exceeding '
                    f"{self.target}'s {self.item_limit}-char per-file limit. "
                    f"It will be truncated by {self.target}."
                )
            if allocation.total + block.size > self.total_limit:
                logger.debug("Budget exhausted, dropping %s", block.rule.name)
                allocation.warnings.append(
                    f'Dropping rule "{block.rule.name}" (priority: {block.rule.priority.value}): '
                    f"would exceed {self.target}'s {self.total_limit}-char total limit "
                    f"(current: {allocation.total} chars)."
                )
                continue
            allocation.total += block.size
            allocation.files.append(block.file)

        if aggregate is not None:
            size = rendered_size(aggregate)
            if allocation.total + size > self.total_limit:
                allocation.warnings.append(
                    f"Conventions file {aggregate.path} ({size} chars) would exceed "
                    f"{self.target}'s {self.total_limit}-char total limit. "
                    "Some degraded content may be truncated."
                )
            allocation.total += size
            allocation.files.append(aggregate)
        return allocation
