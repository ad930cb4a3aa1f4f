"""Compile abstract lifecycle hooks into Claude settings entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from agentrc.constants import HOOKS_DIRNAME, SOURCE_DIRNAME
from agentrc.core.ir import Hook, HookEvent
from agentrc.hooks.globs import glob_to_regex

FILE_PLACEHOLDER = "{file}"
FILE_PARAMETER = "$1"
FILE_PATH_PIPELINE = "jq -r '.tool_input.file_path' | xargs -I {} sh -c '%s' _ {}"


@dataclass(frozen=True)
class HookTrigger:
    event: str
    matcher: str


EVENT_TRIGGERS: dict[HookEvent, HookTrigger] = {
    HookEvent.POST_EDIT: HookTrigger(event="PostToolUse", matcher="Edit|Write|MultiEdit"),
    HookEvent.POST_CREATE: HookTrigger(event="PostToolUse", matcher="Write"),
    HookEvent.PRE_COMMIT: HookTrigger(event="Notification", matcher="Stop"),
}


def map_hook_event(event: HookEvent) -> HookTrigger:
    return EVENT_TRIGGERS[event]


def resolve_run_path(run: str) -> str:
    prefix = f"{HOOKS_DIRNAME}/"
    if run.startswith(prefix):
        return f"{SOURCE_DIRNAME}/{run}"
    return run


def _match_guard(match: str) -> str:
    return f'echo "{FILE_PARAMETER}" | grep -qE "{glob_to_regex(match)}" && '


def build_hook_command(hook: Hook) -> str:
    """Shell command for ``hook``.

    The edited path arrives as JSON on stdin; it is extracted with ``jq`` and
    bound to ``$1`` of an inner ``sh -c`` so ``{file}`` never expands inline.
    """
    run = resolve_run_path(hook.run)
    guard = _match_guard(hook.match) if hook.match else ""

    if FILE_PLACEHOLDER in run:
        inner = run.replace(FILE_PLACEHOLDER, FILE_PARAMETER)
        return FILE_PATH_PIPELINE % f"{guard}{inner}"
    if guard:
        return FILE_PATH_PIPELINE % f"{guard}{run}"
    return run


def compile_hooks(hooks: Iterable[Hook]) -> dict[str, Any]:
    """Settings payload with hooks grouped by trigger event, first seen first."""
    grouped: dict[str, list[dict[str, Any]]] = {}
    for hook in hooks:
        trigger = map_hook_event(hook.event)
        grouped.setdefault(trigger.event, []).append(
            {
                "matcher": trigger.matcher,
                "hooks": [{"type": "command", "command": build_hook_command(hook)}],
            }
        )
    if not grouped:
        return {}
    return {"hooks": grouped}
