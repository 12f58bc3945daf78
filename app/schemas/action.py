"""
Result schema shared by every form action.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class ActionState(BaseModel):
    """
    State returned by a create, update or delete action.

    Validation failures carry `errors` and a summary `message`; persistence
    failures carry only `message`; successes carry at most `redirect_to`.
    """

    errors: Optional[Dict[str, List[str]]] = Field(
        None,
        description="Field name -> validation messages"
    )
    message: Optional[str] = Field(
        None,
        description="Human-readable summary of the failure"
    )
    redirect_to: Optional[str] = Field(
        None,
        description="Listing route the caller should navigate to"
    )

    @property
    def ok(self) -> bool:
        """True when the action completed without validation or database errors."""
        return self.errors is None and self.message is None

    @classmethod
    def invalid(cls, errors: Dict[str, List[str]], message: str) -> "ActionState":
        return cls(errors=errors, message=message)

    @classmethod
    def failed(cls, message: str) -> "ActionState":
        return cls(message=message)

    @classmethod
    def redirect(cls, path: str) -> "ActionState":
        return cls(redirect_to=path)
