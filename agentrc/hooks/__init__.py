from agentrc.hooks.compiler import build_hook_command, compile_hooks, map_hook_event
from agentrc.hooks.globs import glob_to_regex

__all__ = ["build_hook_command", "compile_hooks", "glob_to_regex", "map_hook_event"]
