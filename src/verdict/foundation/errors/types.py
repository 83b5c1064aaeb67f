"""Type aliases and exception snapshots for structured serialization."""

from __future__ import annotations

from typing import Annotated, Any, Self, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

# Any for recursive slots to avoid Pydantic resolution issues
JsonValue: TypeAlias = Union[str, int, float, bool, None, list[Any], dict[str, Any]]
JsonDict: TypeAlias = dict[str, Any]

# ═══════════════════════════════════════════════════════════════════════════════
# Exception Snapshot
# ═══════════════════════════════════════════════════════════════════════════════


class ExceptionInfo(BaseModel):
    """Serializable snapshot of an exception captured as a Failure payload."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Exception Info", "examples": [{"type": "ZeroDivisionError", "message": "division by zero", "module": "builtins"}]},
    )

    type: Annotated[str, Field(min_length=1)]
    message: str = ""
    module: str = Field(default="builtins", repr=False)

    @computed_field
    @property
    def qualified_name(self) -> str:
        return self.type if self.module == "builtins" else f"{self.module}.{self.type}"

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        """Snapshot exception type and message. Uses model_construct: inputs are already strings."""
        kind = type(exc)
        return cls.model_construct(type=kind.__qualname__, message=str(exc), module=kind.__module__)

    def __str__(self) -> str:
        return f"{self.type}: {self.message}" if self.message else self.type

