"""
Invoice dashboard endpoints: listing, forms and the create/update/delete actions.
Mutations accept raw form submissions and hand them to the invoice actions unvalidated.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from uuid import UUID

from app.config import settings
from app.schemas.forms import FormDescriptor, INVOICE_FIELDS, collect_form_values, invoice_form
from app.schemas.invoice import InvoiceResponse, InvoiceListResponse
from app.schemas.error import get_error_responses, get_action_error_responses
from app.services.invoice import InvoiceService
from app.services.revalidation import ViewInvalidator, get_view_invalidator
from app.routers.common import read_form, action_response, api_path
from app.utils.dependencies import get_current_active_user, get_invoice_service


router = APIRouter(
    prefix=settings.invoices_listing_path,
    tags=["Invoices"],
    dependencies=[Depends(get_current_active_user)],
    responses=get_error_responses(401, 403)
)


@router.get(
    "",
    response_model=InvoiceListResponse,
    summary="List invoices",
    description="Invoices newest first. Served from the listing cache until a mutation invalidates it."
)
async def list_invoices(
    invoice_service: InvoiceService = Depends(get_invoice_service),
    invalidator: ViewInvalidator = Depends(get_view_invalidator)
):
    path = invoice_service.listing_path
    cached = invalidator.cache.get(path)
    if cached is not None:
        return cached
    generation = invalidator.cache.generation(path)

    invoices = await invoice_service.list_invoices()
    listing = InvoiceListResponse(
        invoices=[InvoiceResponse.model_validate(invoice.to_dict()) for invoice in invoices],
        total=len(invoices)
    ).model_dump(mode="json")

    invalidator.cache.set(path, listing, generation=generation)
    return listing


@router.get(
    "/create",
    response_model=FormDescriptor,
    summary="Create invoice form"
)
async def create_invoice_form() -> FormDescriptor:
    return invoice_form(api_path(settings.invoices_listing_path))


@router.post(
    "",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Create invoice",
    description="Validate the submitted form and insert one invoice. Redirects to the listing on success.",
    responses=get_action_error_responses()
)
async def create_invoice(
    request: Request,
    invoice_service: InvoiceService = Depends(get_invoice_service)
) -> Response:
    form = collect_form_values(await read_form(request), INVOICE_FIELDS)
    state = await invoice_service.create_invoice(form)
    return action_response(state)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Get invoice",
    responses=get_error_responses(404)
)
async def get_invoice(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service)
) -> InvoiceResponse:
    invoice = await invoice_service.get_invoice(invoice_id)
    return InvoiceResponse.model_validate(invoice.to_dict())


@router.get(
    "/{invoice_id}/edit",
    response_model=FormDescriptor,
    summary="Edit invoice form",
    description="Form descriptor pre-filled with the stored invoice.",
    responses=get_error_responses(404)
)
async def edit_invoice_form(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service)
) -> FormDescriptor:
    invoice = await invoice_service.get_invoice(invoice_id)
    return invoice_form(api_path(settings.invoices_listing_path), invoice)


@router.api_route(
    "/{invoice_id}",
    methods=["POST", "PUT"],
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Update invoice",
    description="Replace the invoice's customer, amount and status. Redirects to the listing on success.",
    responses=get_action_error_responses()
)
async def update_invoice(
    invoice_id: UUID,
    request: Request,
    invoice_service: InvoiceService = Depends(get_invoice_service)
) -> Response:
    form = collect_form_values(await read_form(request), INVOICE_FIELDS)
    state = await invoice_service.update_invoice(invoice_id, form)
    return action_response(state)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete invoice",
    description="Delete one invoice and invalidate the listing. Does not redirect.",
    responses=get_action_error_responses()
)
async def delete_invoice(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service)
) -> Response:
    state = await invoice_service.delete_invoice(invoice_id)
    return action_response(state)
