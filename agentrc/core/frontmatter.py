"""Parse markdown sources with YAML frontmatter."""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from agentrc.core.ir import Priority
from agentrc.core.source import ParsedFrontmatter, ParsedMarkdown

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        raw = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.debug("Ignoring malformed frontmatter: %s", exc)
        return {}, text
    if not isinstance(raw, dict):
        return {}, text
    return raw, text[match.end() :]


def _as_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def _as_bool(value: Any) -> bool | None:
    if value is None:
        return None
    return bool(value)


def _as_priority(value: Any) -> Priority:
    try:
        return Priority(str(value).lower())
    except ValueError:
        return Priority.NORMAL


def normalize_frontmatter(raw: dict[str, Any]) -> ParsedFrontmatter:
    always_apply = raw.get("alwaysApply", raw.get("always_apply"))
    description = raw.get("description")
    model = raw.get("model")
    return ParsedFrontmatter(
        globs=_as_list(raw.get("globs")),
        always_apply=_as_bool(always_apply),
        manual=_as_bool(raw.get("manual")),
        description=str(description) if description is not None else None,
        priority=_as_priority(raw.get("priority")),
        aliases=_as_list(raw.get("aliases")),
        model=str(model) if model is not None else None,
        tools=_as_list(raw.get("tools")),
    )


def parse_frontmatter(text: str) -> ParsedMarkdown:
    raw, body = split_frontmatter(text)
    return ParsedMarkdown(frontmatter=normalize_frontmatter(raw), content=body.strip())
