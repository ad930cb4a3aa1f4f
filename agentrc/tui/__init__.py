from agentrc.tui.renderers import BuildConsoleUI

__all__ = ["BuildConsoleUI"]
