"""
Outcome envelope passed from the extraction service to the routes.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, cast

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Result(Generic[T]):
    """
    Either `data` (ok) or an error `code` plus message.

    `meta` carries side facts for both outcomes, e.g. whether a PNG had a
    "prompt" entry at all:

        Result.Ok(PromptPair(), has_prompt=False)
        Result.Err(ErrorCode.NOT_FOUND, "File not found: fox.png")
    """

    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: str = "OK"
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def Ok(cls, data: T, **meta: Any) -> "Result[T]":
        return cls(ok=True, data=data, meta=meta)

    @classmethod
    def Err(cls, code: "str | Enum", error: str, **meta: Any) -> "Result[T]":
        code_value = code.value if isinstance(code, Enum) else code
        return cls(ok=False, error=error, code=str(code_value), meta=meta)

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Transform the data of a success (meta kept); failures pass through."""
        if not self.ok or self.data is None:
            return cast("Result[U]", self)
        return Result(ok=True, data=fn(self.data), meta=dict(self.meta))
