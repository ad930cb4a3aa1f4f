"""Generated-file markers, one comment syntax per file type."""

from __future__ import annotations

import json
import re
from pathlib import PurePosixPath
from typing import Any

from agentrc.constants import GENERATED_JSON_KEY, GENERATED_MARKER

_FRONTMATTER_BLOCK_RE = re.compile(r"\A---[ \t]*\r?\n.*?\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

_HTML_SUFFIXES = frozenset({".md", ".mdc"})
_HASH_SUFFIXES = frozenset({".toml", ".yaml", ".yml", ".sh", ".py"})
_SLASH_SUFFIXES = frozenset({".js", ".ts"})


def _suffix(path: str) -> str:
    return PurePosixPath(path).suffix.lower()


def marker_line(path: str) -> str | None:
    suffix = _suffix(path)
    if suffix in _HTML_SUFFIXES:
        return f"<!-- {GENERATED_MARKER} -->"
    if suffix in _HASH_SUFFIXES:
        return f"# {GENERATED_MARKER}"
    if suffix in _SLASH_SUFFIXES:
        return f"// {GENERATED_MARKER}"
    return None


def add_marker(path: str, content: str) -> str:
    """``content`` with the marker for ``path``; unchanged for unmarkable types.

    Leading frontmatter and shebang lines stay first.
    """
    if _suffix(path) == ".json":
        return _add_json_marker(content)
    line = marker_line(path)
    if line is None:
        return content

    match = _FRONTMATTER_BLOCK_RE.match(content)
    if match and _suffix(path) in _HTML_SUFFIXES:
        head = match.group(0)
        if not head.endswith("\n"):
            head += "\n"
        return f"{head}{line}\n{content[match.end():]}"
    if content.startswith("#!"):
        shebang, _, rest = content.partition("\n")
        return f"{shebang}\n{line}\n{rest}"
    return f"{line}\n{content}"


def _add_json_marker(content: str) -> str:
    try:
        payload: Any = json.loads(content)
    except ValueError:
        return content
    if not isinstance(payload, dict):
        return content
    marked = {GENERATED_JSON_KEY: GENERATED_MARKER}
    marked.update({key: value for key, value in payload.items() if key != GENERATED_JSON_KEY})
    return json.dumps(marked, indent=2) + "\n"


def has_marker(path: str, content: str) -> bool:
    if _suffix(path) == ".json":
        try:
            payload = json.loads(content)
        except ValueError:
            return False
        return isinstance(payload, dict) and GENERATED_JSON_KEY in payload
    line = marker_line(path)
    if line is None:
        return False
    return line in content.splitlines()[:64]
