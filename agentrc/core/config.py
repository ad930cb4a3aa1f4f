"""Schema-validated parsing of ``.agentrc/config.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator

from agentrc.adapters.profiles import PROFILE_NAMES
from agentrc.core.ir import Hook, HookEvent
from agentrc.core.source import AgentrcConfig
from agentrc.errors import InvalidConfigError


def config_schema(target_names: list[str] | None = None) -> dict[str, Any]:
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "agentrc config",
        "type": "object",
        "required": ["version"],
        "properties": {
            "version": {"type": "string", "enum": ["1"]},
            "targets": {
                "type": "array",
                "items": {"type": "string", "enum": target_names or list(PROFILE_NAMES)},
            },
            "hooks": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["event", "run", "description"],
                    "properties": {
                        "event": {
                            "type": "string",
                            "enum": [event.value for event in HookEvent],
                        },
                        "match": {"type": "string"},
                        "run": {"type": "string"},
                        "description": {"type": "string"},
                    },
                    "additionalProperties": False,
                },
            },
        },
        "additionalProperties": False,
    }


def format_schema_error(error: Any) -> str:
    path = "/".join(str(part) for part in error.absolute_path)
    return f"/{path}: {error.message}"


def parse_config(
    text: str, path: Path | None = None, target_names: list[str] | None = None
) -> AgentrcConfig:
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigError(path, f"not valid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise InvalidConfigError(path, "must contain a YAML mapping")

    validator = Draft7Validator(config_schema(target_names))
    errors = sorted(
        validator.iter_errors(parsed),
        key=lambda item: [str(part) for part in item.absolute_path],
    )
    if errors:
        raise InvalidConfigError(
            path, "; ".join(format_schema_error(error) for error in errors)
        )

    hooks = [
        Hook(
            event=HookEvent(item["event"]),
            run=item["run"],
            description=item["description"],
            match=item.get("match"),
        )
        for item in parsed.get("hooks", [])
    ]
    return AgentrcConfig(
        version=parsed["version"],
        targets=list(parsed.get("targets", [])),
        hooks=hooks,
    )
