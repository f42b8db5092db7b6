"""
==============================================================================
Operator Context
==============================================================================

The acting operator, passed explicitly into services that record or log who
performed an action.

==============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dashboard.db.models import Operator


@dataclass(frozen=True)
class OperatorContext:
    """Identity of the operator performing a request."""

    operator_id: str
    email: str
    display_name: Optional[str] = None

    @classmethod
    def from_operator(cls, operator: Operator) -> OperatorContext:
        return cls(
            operator_id=operator.id,
            email=operator.email,
            display_name=operator.display_name,
        )

    def __str__(self) -> str:
        return self.email
