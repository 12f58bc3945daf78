"""
Property actions for the dashboard.
Handles create, update and delete of rental properties from raw form submissions.
"""

from typing import Any, List, Mapping, Optional
from app.config import settings
from app.models.property import Property
from app.repositories.base import RecordStore
from app.schemas.action import ActionState
from app.schemas.property import PropertyForm
from app.services.actions import FormActionService
from app.services.revalidation import ViewInvalidator
from app.utils.exceptions import PropertyNotFoundError
from app.utils.validators import validate_form
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService(FormActionService[Property]):
    """Property form actions; updates replace every field of the record."""

    entity_name = "Property"

    def __init__(
        self,
        store: RecordStore[Property],
        invalidator: ViewInvalidator,
        listing_path: Optional[str] = None
    ):
        super().__init__(store, invalidator, listing_path or settings.properties_listing_path)

    async def create_property(self, form: Mapping[str, Any]) -> ActionState:
        """
        Create a property from a raw form submission.

        Args:
            form: Raw values for title, address, imageUrl, monthlyRent,
                  tenants, lettingStatus and complianceStatus

        Returns:
            Field errors, a database failure message, or a redirect to the properties listing
        """
        validated = validate_form(PropertyForm, form)
        if not validated.success:
            return self.validation_failed(validated.errors, "Create")

        record = validated.data.to_record()

        state = await self.execute("Create", lambda: self.store.create(record))
        if not state.ok:
            return state

        logger.info(f"Property created: {record['title']}")
        return self.committed(navigate=True)

    async def update_property(self, property_id: uuid.UUID, form: Mapping[str, Any]) -> ActionState:
        """
        Replace every field of a property.

        Args:
            property_id: UUID of the property
            form: Raw values for all property fields

        Returns:
            Field errors, a database failure message, or a redirect to the properties listing
        """
        validated = validate_form(PropertyForm, form)
        if not validated.success:
            return self.validation_failed(validated.errors, "Update")

        record = validated.data.to_record()

        state = await self.execute("Update", lambda: self.store.update(property_id, record))
        if not state.ok:
            return state

        logger.info(f"Property updated: {property_id}")
        return self.committed(navigate=True)

    async def delete_property(self, property_id: uuid.UUID) -> ActionState:
        """Delete a property; invalidates the listing without navigating."""
        state = await self.execute("Delete", lambda: self.store.delete(property_id))
        if not state.ok:
            return state

        logger.info(f"Property deleted: {property_id}")
        return self.committed(navigate=False)

    async def list_properties(self, skip: int = 0, limit: int = 100) -> List[Property]:
        return await self.list_records(skip=skip, limit=limit)

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get a property by ID.

        Raises:
            PropertyNotFoundError: If no property has this id
        """
        property_obj = await self.find_record(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj
