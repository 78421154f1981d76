# flakeproof/core/tools/spec.py
"""
Tool Specification - one named, schema-validated operation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict

from ..outcome import HandlerOutput
from .context import ToolContext


class ToolInput(BaseModel):
    """
    Base class for tool input models.

    Unknown fields are rejected and strings are stripped before length
    checks run.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class EmptyInput(ToolInput):
    """Input model for tools that take no arguments."""


HandlerReturn = Union[HandlerOutput, Mapping[str, Any], None]
Handler = Callable[[Any, ToolContext], Union[HandlerReturn, Awaitable[HandlerReturn]]]


@dataclass(frozen=True)
class ToolSpec:
    """
    Tool specification

    Attributes:
        name: Tool name (unique identifier)
        handler: Sync or async callable(validated_input, context)
        input_model: Pydantic model the raw input is validated against
        description: Human-readable description
    """
    name: str
    handler: Handler
    input_model: Type[BaseModel] = EmptyInput
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or not isinstance(self.name, str):
            raise ValueError("tool name must be non-empty str")
        if not callable(self.handler):
            raise ValueError(f"tool '{self.name}' handler must be callable")
        if self.input_model.model_config.get("extra") != "forbid":
            raise ValueError(
                f"tool '{self.name}' input model must forbid unknown fields "
                f"(subclass ToolInput or set extra='forbid')"
            )

    def validate_input(self, raw_input: Optional[Any]) -> BaseModel:
        """
        Raises:
            pydantic.ValidationError: input does not match the model
        """
        return self.input_model.model_validate({} if raw_input is None else raw_input)

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()


__all__ = [
    "ToolInput",
    "EmptyInput",
    "Handler",
    "HandlerReturn",
    "ToolSpec",
]
