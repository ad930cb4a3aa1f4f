"""Managed block of generated paths inside the project's ``.gitignore``."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from agentrc.constants import GITIGNORE_FILENAME

BLOCK_START = "# >>> agentrc managed (do not edit) >>>"
BLOCK_END = "# <<< agentrc managed <<<"


def render_block(entries: Iterable[str]) -> str:
    return "\n".join([BLOCK_START, *sorted(set(entries)), BLOCK_END])


def _find_block(content: str) -> tuple[int, int] | None:
    start = content.find(BLOCK_START)
    end = content.find(BLOCK_END, start + 1)
    if start == -1 or end == -1:
        return None
    return start, end + len(BLOCK_END)


def update_gitignore(root: Path, entries: Iterable[str]) -> bool:
    entries = list(entries)
    if not entries:
        return remove_gitignore_block(root)

    path = root / GITIGNORE_FILENAME
    content = path.read_text(encoding="utf-8") if path.exists() else ""
    block = render_block(entries)

    span = _find_block(content)
    if span is not None:
        updated = f"{content[:span[0]]}{block}{content[span[1]:]}"
    elif content:
        separator = "\n" if content.endswith("\n") else "\n\n"
        updated = f"{content}{separator}{block}\n"
    else:
        updated = f"{block}\n"

    if updated == content:
        return False
    path.write_text(updated, encoding="utf-8")
    return True


def remove_gitignore_block(root: Path) -> bool:
    path = root / GITIGNORE_FILENAME
    if not path.exists():
        return False
    content = path.read_text(encoding="utf-8")
    span = _find_block(content)
    if span is None:
        return False

    cleaned = f"{content[:span[0]].rstrip()}{content[span[1]:]}".rstrip()
    path.write_text(f"{cleaned}\n" if cleaned else "", encoding="utf-8")
    return True
