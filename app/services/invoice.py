"""
Invoice actions for the dashboard.
Handles create, update and delete of invoices from raw form submissions.
"""

from typing import Any, Callable, List, Mapping, Optional
from datetime import date, datetime, timezone
from app.config import settings
from app.models.invoice import Invoice
from app.repositories.base import RecordStore
from app.schemas.action import ActionState
from app.schemas.invoice import InvoiceForm
from app.services.actions import FormActionService
from app.services.revalidation import ViewInvalidator
from app.utils.exceptions import InvoiceNotFoundError
from app.utils.validators import validate_form
import uuid
import logging

logger = logging.getLogger(__name__)


def utc_today() -> date:
    """Today's calendar date in UTC, used as the invoice date."""
    return datetime.now(timezone.utc).date()


class InvoiceService(FormActionService[Invoice]):
    """
    Invoice form actions.
    Amounts are stored in cents and the invoice date is set here, never taken from input.
    """

    entity_name = "Invoice"

    def __init__(
        self,
        store: RecordStore[Invoice],
        invalidator: ViewInvalidator,
        listing_path: Optional[str] = None,
        today: Callable[[], date] = utc_today
    ):
        super().__init__(store, invalidator, listing_path or settings.invoices_listing_path)
        self.today = today

    async def create_invoice(self, form: Mapping[str, Any]) -> ActionState:
        """
        Create an invoice from a raw form submission.

        Args:
            form: Raw values for customerId, amount and status

        Returns:
            Field errors, a database failure message, or a redirect to the invoices listing
        """
        validated = validate_form(InvoiceForm, form)
        if not validated.success:
            return self.validation_failed(validated.errors, "Create")

        record = {**validated.data.to_record(), "date": self.today()}

        state = await self.execute("Create", lambda: self.store.create(record))
        if not state.ok:
            return state

        logger.info(f"Invoice created for customer {record['customer_id']}: {record['amount']} cents")
        return self.committed(navigate=True)

    async def update_invoice(self, invoice_id: uuid.UUID, form: Mapping[str, Any]) -> ActionState:
        """
        Replace an invoice's customer, amount and status.

        An unknown id affects no rows and is still reported as success.

        Args:
            invoice_id: UUID of the invoice
            form: Raw values for customerId, amount and status

        Returns:
            Field errors, a database failure message, or a redirect to the invoices listing
        """
        validated = validate_form(InvoiceForm, form)
        if not validated.success:
            return self.validation_failed(validated.errors, "Update")

        record = validated.data.to_record()

        state = await self.execute("Update", lambda: self.store.update(invoice_id, record))
        if not state.ok:
            return state

        logger.info(f"Invoice updated: {invoice_id}")
        return self.committed(navigate=True)

    async def delete_invoice(self, invoice_id: uuid.UUID) -> ActionState:
        """
        Delete an invoice.
        Invoked from the listing itself, so it invalidates but never navigates.

        Args:
            invoice_id: UUID of the invoice

        Returns:
            Empty state on success, or a database failure message
        """
        state = await self.execute("Delete", lambda: self.store.delete(invoice_id))
        if not state.ok:
            return state

        logger.info(f"Invoice deleted: {invoice_id}")
        return self.committed(navigate=False)

    async def list_invoices(self, skip: int = 0, limit: int = 100) -> List[Invoice]:
        return await self.list_records(skip=skip, limit=limit)

    async def get_invoice(self, invoice_id: uuid.UUID) -> Invoice:
        """
        Get an invoice by ID.

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        invoice = await self.find_record(invoice_id)
        if not invoice:
            raise InvoiceNotFoundError(str(invoice_id))
        return invoice
