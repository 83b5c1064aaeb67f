"""Exception taxonomy for contract violations.

Domain failures are Failure values and never raised. The exceptions here
signal programming errors: misuse of the Result API, malformed chains, and
unmatched pattern coverage. Each carries a structured ErrorDetail.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

if TYPE_CHECKING:
    from verdict.foundation.result import Result


class ErrorCode(StrEnum):
    """Machine-readable codes for library errors."""
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"
    EMPTY_CHAIN = "EMPTY_CHAIN"
    MISSING_INPUT = "MISSING_INPUT"
    MISSING_CONTEXT = "MISSING_CONTEXT"
    NO_MATCH = "NO_MATCH"
    UNWRAP = "UNWRAP"


class ErrorDetail(BaseModel):
    """Structured description of a library error.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional extra information (offending value, step index)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Error Detail",
            "examples": [{"code": "NO_MATCH", "message": "no clause matched Success(1)"}],
        },
    )

    code: ErrorCode = Field(default=ErrorCode.CONTRACT_VIOLATION)
    message: Annotated[str, Field(min_length=1)]
    details: str | None = Field(default=None, repr=False)

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_coverage_gap(self) -> bool:
        """Whether the error points at missing pattern coverage rather than API misuse."""
        return self.code == ErrorCode.NO_MATCH

    def render(self) -> str:
        return f"[{self.code}] {self.message}" + (f" ({self.details})" if self.details else "")

    __str__ = render


class VerdictError(Exception):
    """Base for all errors raised by verdict itself."""

    code: ErrorCode = ErrorCode.CONTRACT_VIOLATION

    def __init__(self, message: str, *, details: str | None = None) -> None:
        self.error = ErrorDetail(code=self.code, message=message, details=details)
        super().__init__(message)


class ResultContractError(VerdictError, TypeError):
    """A Result operation was given or returned something that is not a Result."""

    code = ErrorCode.CONTRACT_VIOLATION


class ChainContractError(VerdictError, ValueError):
    """A chain was declared or executed in a way that has no meaningful result."""

    code = ErrorCode.CONTRACT_VIOLATION


class EmptyChainError(ChainContractError):
    code = ErrorCode.EMPTY_CHAIN


class MissingInputError(ChainContractError):
    """The first step of a chain requires the previous step's payload."""

    code = ErrorCode.MISSING_INPUT


class MissingContextError(ChainContractError):
    """A step asked for ``ctx`` but the chain was run without a context."""

    code = ErrorCode.MISSING_CONTEXT


class NoMatchError(VerdictError, LookupError):
    """No clause matched the Result handed to the matcher."""

    code = ErrorCode.NO_MATCH

    def __init__(self, result: Result[object, object], *, clauses: int = 0) -> None:
        self.result = result
        super().__init__(f"no clause matched {result!r}", details=f"{clauses} clause(s) tried")


class UnwrapError(VerdictError, RuntimeError):
    """A payload was extracted from the wrong variant."""

    code = ErrorCode.UNWRAP
