from agentrc.core.builder import build_ir, determine_scope, sort_by_priority
from agentrc.core.ir import IR, Agent, Command, Hook, HookEvent, Priority, Rule, RuleScope, Skill

__all__ = [
    "IR",
    "Agent",
    "Command",
    "Hook",
    "HookEvent",
    "Priority",
    "Rule",
    "RuleScope",
    "Skill",
    "build_ir",
    "determine_scope",
    "sort_by_priority",
]
