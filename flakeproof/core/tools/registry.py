# flakeproof/core/tools/registry.py

from typing import Any, Dict, List, Optional

from .spec import ToolSpec


class ToolRegistry:
    """
    Name -> ToolSpec registry.

    Names are unique; registering the same name twice is a configuration
    error.
    """

    def __init__(self) -> None:
        self._specs: Dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> ToolSpec:
        if not isinstance(spec, ToolSpec):
            raise ValueError("register() expects a ToolSpec")
        if spec.name in self._specs:
            raise ValueError(f"tool '{spec.name}' is already registered")
        self._specs[spec.name] = spec
        return spec

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._specs.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def list(self) -> List[str]:
        return list(self._specs.keys())

    def describe(self, name: str) -> Dict[str, Any]:
        spec = self._specs.get(name)
        if spec is None:
            return {}
        return {
            "name": spec.name,
            "description": spec.description or (spec.handler.__doc__ or "").strip(),
            "input_schema": spec.input_schema(),
        }
