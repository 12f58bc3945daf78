"""
Helpers shared by the dashboard routers: reading form submissions and
turning action results into HTTP responses.
"""

from typing import Any, Mapping
from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from app.config import settings
from app.schemas.action import ActionState
from app.utils.exceptions import BadRequestError
import json


async def read_form(request: Request) -> Mapping[str, Any]:
    """
    Read a submission as a mapping of raw values.

    Accepts url-encoded and multipart forms, or a JSON object for programmatic callers.

    Raises:
        BadRequestError: If a JSON body is malformed or not an object
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except json.JSONDecodeError:
            raise BadRequestError("Request body is not valid JSON")
        if not isinstance(body, dict):
            raise BadRequestError("Request body must be a JSON object")
        return body

    return await request.form()


def api_path(path: str) -> str:
    """Prefix a logical route path with the API version prefix."""
    return f"{settings.api_v1_prefix}{path}"


def action_response(state: ActionState) -> Response:
    """
    Convert an action result into a response.

    Field errors -> 422 with errors and message; database failure -> 500 with
    message only; navigation -> 303 to the listing; otherwise 204.
    """
    if state.errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=state.model_dump(exclude_none=True)
        )

    if state.message:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=state.model_dump(exclude_none=True)
        )

    if state.redirect_to:
        return RedirectResponse(url=api_path(state.redirect_to), status_code=status.HTTP_303_SEE_OTHER)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
