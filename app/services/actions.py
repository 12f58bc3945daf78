"""
Shared flow for the dashboard's form actions.

Every action follows the same steps: validate the raw form, run one
statement through the persistence port, notify view invalidation, then
tell the caller where to navigate.
"""

from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from app.repositories.base import RecordStore, ModelType
from app.schemas.action import ActionState
from app.services.revalidation import ViewInvalidator
import logging

logger = logging.getLogger(__name__)

# Failures reported to the caller as an opaque database error.
# Connection-level failures surface as OSError before SQLAlchemy wraps them.
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)


class FormActionService(Generic[ModelType]):
    """
    Base class for entity form actions.

    Subclasses set `entity_name` and implement the create/update/delete
    operations in terms of the helpers below.
    """

    entity_name: str = "Record"

    def __init__(self, store: RecordStore[ModelType], invalidator: ViewInvalidator, listing_path: str):
        self.store = store
        self.invalidator = invalidator
        self.listing_path = listing_path

    def validation_failed(self, errors: Dict[str, List[str]], verb: str) -> ActionState:
        """Result for a form that failed validation; no I/O has happened."""
        logger.info(f"{verb} {self.entity_name} rejected: invalid fields {sorted(errors)}")
        return ActionState.invalid(errors, f"Missing Fields. Failed to {verb} {self.entity_name}.")

    async def execute(self, verb: str, operation: Callable[[], Awaitable[Any]]) -> ActionState:
        """
        Run one persistence call and translate its outcome.

        Args:
            verb: Create, Update or Delete, used in the failure message
            operation: Zero-argument coroutine function issuing the statement

        Returns:
            Failure state on a database error; otherwise an empty state
            whose `redirect_to` the caller fills in
        """
        try:
            outcome = await operation()
        except PERSISTENCE_ERRORS:
            logger.error(f"Database error during {verb.lower()} of {self.entity_name}", exc_info=True)
            return ActionState.failed(f"Database Error: Failed to {verb} {self.entity_name}.")

        if outcome is False:
            # Zero rows affected: the record is already gone or never existed
            logger.warning(f"{verb} {self.entity_name} affected no rows")
        return ActionState()

    def committed(self, navigate: bool = True) -> ActionState:
        """
        Invalidate the listing after a successful statement.

        Args:
            navigate: Whether the caller should be sent to the listing

        Returns:
            Success state, carrying the listing path when navigating
        """
        self.invalidator.revalidate_path(self.listing_path)
        if navigate:
            return ActionState.redirect(self.listing_path)
        return ActionState()

    async def list_records(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return await self.store.get_multi(skip=skip, limit=limit)

    async def find_record(self, record_id) -> Optional[ModelType]:
        return await self.store.get_by_id(record_id)
