import hashlib
import json
import shutil
from copy import deepcopy
from datetime import datetime
from pathlib import Path
from typing import Any


def now_stamp() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def read_json_safe(path: Path) -> tuple[Any | None, str | None]:
    if not path.exists():
        return None, None
    if path.stat().st_size == 0:
        return None, None
    try:
        return read_json(path), None
    except (OSError, ValueError) as exc:
        return None, str(exc)


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, sort_keys=False) + "\n"


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(payload), encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def file_checksum(path: Path) -> str | None:
    if not path.is_file():
        return None
    return hashlib.sha256(path.read_bytes()).hexdigest()


def backup_file(path: Path, backup_root: Path, relative: str, stamp: str) -> Path:
    backup_path = backup_root / stamp / relative
    backup_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(path, backup_path)
    return backup_path


def is_under(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge ``overlay`` into a copy of ``base``.

    Nested dicts merge key by key; any other overlay value (lists included)
    replaces the base value.
    """
    merged = deepcopy(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def leaf_key_paths(payload: dict[str, Any], depth: int = 2) -> list[str]:
    """Dotted key paths of ``payload`` down to ``depth`` levels."""
    paths: list[str] = []
    for key, value in payload.items():
        if depth > 1 and isinstance(value, dict) and value:
            paths.extend(f"{key}.{child}" for child in leaf_key_paths(value, depth - 1))
        else:
            paths.append(key)
    return paths


def remove_key_path(payload: dict[str, Any], dotted: str) -> bool:
    """Delete ``dotted`` from ``payload``, pruning parents left empty."""
    head, _, rest = dotted.partition(".")
    if head not in payload:
        return False
    if not rest:
        del payload[head]
        return True
    child = payload[head]
    if not isinstance(child, dict):
        return False
    removed = remove_key_path(child, rest)
    if removed and not child:
        del payload[head]
    return removed


def prune_empty_dirs(start: Path, stop: Path) -> None:
    current = start
    while current != stop and is_under(current, stop):
        try:
            current.rmdir()
        except OSError:
            return
        current = current.parent


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text
