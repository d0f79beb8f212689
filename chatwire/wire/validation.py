"""
Validation entry points returning results instead of raising.

Every ``validate_*`` function returns a :class:`ValidationResult` holding
either the typed value or a single :class:`SchemaViolation` (the first error
pydantic reports). Callers on the streaming path inspect ``ok``; callers that
prefer exceptions use ``unwrap()``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..base.errors import ErrorCode, WireError
from .chat_request import ChatCompletionRequest
from .chat_response import ChatCompletionResponse
from .chunk import ChunkResponse
from .models_list import ModelsListResponse

T = TypeVar("T", bound=BaseModel)

ROOT_PATH = "<root>"


@dataclass(frozen=True)
class SchemaViolation:
    """First structural error found in a value.

    Attributes:
        path: Dotted location of the offending field (``choices.0.index``),
            or ``<root>`` when the value itself has the wrong type.
        expected: pydantic error kind (``missing``, ``int_parsing``, ...).
        message: Human-readable description.
    """

    path: str
    expected: str
    message: str

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "SchemaViolation":
        errors = exc.errors()
        if not errors:
            return cls(path=ROOT_PATH, expected="unknown", message=str(exc))
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        return cls(
            path=loc or ROOT_PATH,
            expected=str(first.get("type", "unknown")),
            message=str(first.get("msg", "")),
        )

    def to_dict(self) -> dict:
        return {"path": self.path, "expected": self.expected, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    violation: Optional[SchemaViolation] = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    def unwrap(self) -> T:
        """Return the value or raise ``WireError(SCHEMA_VIOLATION)``."""
        if self.violation is not None:
            raise WireError(
                code=ErrorCode.SCHEMA_VIOLATION,
                message=self.violation.message,
                path=self.violation.path,
                raw=self.violation,
            )
        return self.value  # type: ignore[return-value]


def _validate(model: Type[T], raw: Any) -> ValidationResult[T]:
    try:
        return ValidationResult(value=model.model_validate(raw))
    except ValidationError as exc:
        return ValidationResult(violation=SchemaViolation.from_validation_error(exc))


def validate_request(raw: Any) -> ValidationResult[ChatCompletionRequest]:
    return _validate(ChatCompletionRequest, raw)


def validate_response(raw: Any) -> ValidationResult[ChatCompletionResponse]:
    return _validate(ChatCompletionResponse, raw)


def validate_chunk(raw: Any) -> ValidationResult[ChunkResponse]:
    """Validate one decoded streaming unit.

    Accepts an already-validated :class:`ChunkResponse` as-is.
    """
    if isinstance(raw, ChunkResponse):
        return ValidationResult(value=raw)
    return _validate(ChunkResponse, raw)


def validate_models_list(raw: Any) -> ValidationResult[ModelsListResponse]:
    return _validate(ModelsListResponse, raw)


__all__ = [
    "ROOT_PATH",
    "SchemaViolation",
    "ValidationResult",
    "validate_request",
    "validate_response",
    "validate_chunk",
    "validate_models_list",
]
