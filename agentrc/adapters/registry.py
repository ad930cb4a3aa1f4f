from __future__ import annotations

from collections.abc import Iterable

from agentrc.adapters.base import IAdapter
from agentrc.adapters.engine import ProfileAdapter
from agentrc.adapters.profiles import default_profiles
from agentrc.errors import AdapterNotFoundError


class AdapterRegistry:
    """Name -> adapter lookup, built once at startup and passed around."""

    def __init__(self, adapters: Iterable[IAdapter] = ()) -> None:
        self._adapters: dict[str, IAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: IAdapter) -> None:
        if adapter.name in self._adapters:
            raise ValueError(f"Adapter already registered: {adapter.name}")
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> IAdapter:
        adapter = self._adapters.get(name)
        if adapter is None:
            raise AdapterNotFoundError(name, self.names())
        return adapter

    def resolve(self, names: Iterable[str]) -> list[IAdapter]:
        """Look up every name before any work starts; unknown names are fatal."""
        return [self.get(name) for name in names]

    def names(self) -> list[str]:
        return list(self._adapters)

    def adapters(self) -> list[IAdapter]:
        return list(self._adapters.values())

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)


def create_default_registry() -> AdapterRegistry:
    return AdapterRegistry(ProfileAdapter(profile) for profile in default_profiles())
