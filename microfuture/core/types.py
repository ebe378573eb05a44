"""Core types for future settlement."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, field_validator


class FutureStatus(str, Enum):
    """Settlement states of a future."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class SettledOutcome(BaseModel):
    """Outcome of one input to ``all_settled``.

    ``value`` holds the fulfillment value, or the rejection reason when
    ``status`` is ``REJECTED``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: FutureStatus
    value: Any = None

    @field_validator("status")
    @classmethod
    def _settled(cls, status: FutureStatus) -> FutureStatus:
        if status is FutureStatus.PENDING:
            raise ValueError("An outcome cannot be pending")
        return status

    @property
    def fulfilled(self) -> bool:
        return self.status is FutureStatus.FULFILLED

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "value": self.value}
