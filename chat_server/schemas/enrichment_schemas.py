from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class EnrichmentOutcome(BaseModel, Generic[T]):
    """
    Tagged result of one independent enrichment stage.

    Stages report failures as data instead of raising so that the
    orchestrator can merge sibling results without one aborting the other.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    value: Optional[T] = None
    cause: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "EnrichmentOutcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, cause) -> "EnrichmentOutcome[T]":
        if isinstance(cause, BaseException):
            cause = f"{type(cause).__name__}: {cause}"
        return cls(ok=False, cause=str(cause))
