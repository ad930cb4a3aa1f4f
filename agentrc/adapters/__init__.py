from agentrc.adapters.base import (
    AdapterResult,
    FeatureCategory,
    IAdapter,
    OutputFile,
    Ownership,
    Support,
)
from agentrc.adapters.engine import ProfileAdapter
from agentrc.adapters.profiles import PROFILE_NAMES, PlatformProfile, default_profiles
from agentrc.adapters.registry import AdapterRegistry, create_default_registry

__all__ = [
    "PROFILE_NAMES",
    "AdapterRegistry",
    "AdapterResult",
    "FeatureCategory",
    "IAdapter",
    "OutputFile",
    "Ownership",
    "PlatformProfile",
    "ProfileAdapter",
    "Support",
    "create_default_registry",
    "default_profiles",
]
