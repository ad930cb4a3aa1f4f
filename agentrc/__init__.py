"""agentrc: transpile one agent-behavior source tree into many tool configs."""

__version__ = "0.1.0"
