"""
Property dashboard endpoints: listing, forms and the create/update/delete actions.
Mutations accept raw form submissions and hand them to the property actions unvalidated.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from uuid import UUID

from app.config import settings
from app.schemas.forms import FormDescriptor, PROPERTY_FIELDS, collect_form_values, property_form
from app.schemas.property import PropertyResponse, PropertyListResponse
from app.schemas.error import get_error_responses, get_action_error_responses
from app.services.property import PropertyService
from app.services.revalidation import ViewInvalidator, get_view_invalidator
from app.routers.common import read_form, action_response, api_path
from app.utils.dependencies import get_current_active_user, get_property_service


router = APIRouter(
    prefix=settings.properties_listing_path,
    tags=["Properties"],
    dependencies=[Depends(get_current_active_user)],
    responses=get_error_responses(401, 403)
)


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List properties",
    description="Properties newest first. Served from the listing cache until a mutation invalidates it."
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service),
    invalidator: ViewInvalidator = Depends(get_view_invalidator)
):
    path = property_service.listing_path
    cached = invalidator.cache.get(path)
    if cached is not None:
        return cached
    generation = invalidator.cache.generation(path)

    properties = await property_service.list_properties()
    listing = PropertyListResponse(
        properties=[PropertyResponse.model_validate(property_obj.to_dict()) for property_obj in properties],
        total=len(properties)
    ).model_dump(mode="json")

    invalidator.cache.set(path, listing, generation=generation)
    return listing


@router.get(
    "/create",
    response_model=FormDescriptor,
    summary="Create property form"
)
async def create_property_form() -> FormDescriptor:
    return property_form(api_path(settings.properties_listing_path))


@router.post(
    "",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Create property",
    description="Validate the submitted form and insert one property. Redirects to the listing on success.",
    responses=get_action_error_responses()
)
async def create_property(
    request: Request,
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    form = collect_form_values(await read_form(request), PROPERTY_FIELDS)
    state = await property_service.create_property(form)
    return action_response(state)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/{property_id}/edit",
    response_model=FormDescriptor,
    summary="Edit property form",
    description="Form descriptor pre-filled with the stored property.",
    responses=get_error_responses(404)
)
async def edit_property_form(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> FormDescriptor:
    property_obj = await property_service.get_property(property_id)
    return property_form(api_path(settings.properties_listing_path), property_obj)


@router.api_route(
    "/{property_id}",
    methods=["POST", "PUT"],
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Update property",
    description="Replace every field of the property. Redirects to the listing on success.",
    responses=get_action_error_responses()
)
async def update_property(
    property_id: UUID,
    request: Request,
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    form = collect_form_values(await read_form(request), PROPERTY_FIELDS)
    state = await property_service.update_property(property_id, form)
    return action_response(state)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete one property and invalidate the listing. Does not redirect.",
    responses=get_action_error_responses()
)
async def delete_property(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    state = await property_service.delete_property(property_id)
    return action_response(state)
