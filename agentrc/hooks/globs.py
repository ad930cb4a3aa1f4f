"""Glob pattern to POSIX extended regex, for ``grep -qE`` guards."""

from __future__ import annotations


def glob_to_regex(glob: str) -> str:
    """Translate ``glob`` in one left-to-right pass.

    ``.`` becomes ``\\.``, ``{a,b}`` becomes ``(a|b)`` with each alternative
    translated too, ``**`` becomes ``.*``, a bare ``*`` becomes ``[^/]*`` and
    ``?`` becomes ``.``. Every other character is copied as is.
    """
    parts: list[str] = []
    index = 0
    while index < len(glob):
        char = glob[index]
        if char == "*":
            if glob.startswith("**", index):
                parts.append(".*")
                index += 2
                continue
            parts.append("[^/]*")
        elif char == ".":
            parts.append(r"\.")
        elif char == "?":
            parts.append(".")
        elif char == "{":
            end = glob.find("}", index)
            if end > index + 1:
                alternatives = glob[index + 1 : end].split(",")
                parts.append("(" + "|".join(glob_to_regex(item) for item in alternatives) + ")")
                index = end + 1
                continue
            parts.append(char)
        else:
            parts.append(char)
        index += 1
    return "".join(parts)
