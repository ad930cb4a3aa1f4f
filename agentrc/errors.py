from pathlib import Path


class AgentrcError(Exception):
    """Base user-facing application error."""


class ConfigError(AgentrcError):
    """Fatal for the whole run: bad source tree, bad config, unknown target."""


class SourceNotFoundError(ConfigError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidConfigError(ConfigError):
    def __init__(self, path: Path | None, detail: str) -> None:
        self.path = path
        self.detail = detail
        location = f": {path}" if path is not None else ""
        super().__init__(f"Invalid config ({detail}){location}")


class AdapterNotFoundError(ConfigError):
    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f'Unknown adapter "{name}". Available adapters: {", ".join(available)}'
        )


class GenerationError(AgentrcError):
    def __init__(self, target: str, cause: Exception) -> None:
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to generate for {target}: {cause}")


class OutputWriteError(AgentrcError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Write failed ({detail}): {path}")


class UnreadableSourceError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Unreadable source file ({detail}): {path}")
