from __future__ import annotations

import importlib
import pkgutil
from collections.abc import Iterable

from calculator_agent.schemas.descriptors import ToolDescriptor
from calculator_agent.tools import definitions
from calculator_agent.tools.tool_models import ToolSpec


class ToolRegistry:
    """Tools available to an agent, keyed by the name the model uses to call them."""

    def __init__(self, specs: Iterable[ToolSpec] = ()) -> None:
        self._tools: dict[str, ToolSpec] = {}
        for spec in specs:
            self.register(spec)

    @classmethod
    def discover(cls) -> ToolRegistry:
        """Build a registry from every 'tool' ToolSpec in the 'definitions' package."""
        registry = cls()
        # Walk recursively so tools can be organized by domain folders.
        for _, module_name, is_pkg in pkgutil.walk_packages(
            definitions.__path__, prefix=f"{definitions.__name__}."
        ):
            if is_pkg:
                continue

            module = importlib.import_module(module_name)

            tool_spec = getattr(module, "tool", None)
            if isinstance(tool_spec, ToolSpec):
                registry.register(tool_spec)
        return registry

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Duplicate tool name detected: {spec.name}")
        self._tools[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> list[ToolDescriptor]:
        return [spec.descriptor() for spec in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
