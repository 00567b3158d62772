"""Invitation checking admin routes."""

from aiohttp import web
from aiohttp_apispec import docs, request_schema, response_schema
from marshmallow import fields

from ..core.error import InvitationError
from ..messaging.models.openapi import OpenAPISchema
from .message_types import SPEC_URI
from .models.invitation import CheckInvitationResultSchema
from .parser import InvitationParser

INVITATION_PARSER = web.AppKey("invitation_parser", InvitationParser)


class CheckInvitationRequestSchema(OpenAPISchema):
    """Request schema for checking an invitation URL."""

    invitation_url = fields.Str(
        data_key="invitationUrl",
        required=True,
        metadata={
            "description": "Invitation URL, as scanned or clicked",
            "example": "https://example.org/accept?c_i=eyJAdHlwZSI6ICJkaWQ6c292On0=",
        },
    )


@docs(
    tags=["invitation"],
    summary="Resolve and classify an invitation URL",
)
@request_schema(CheckInvitationRequestSchema())
@response_schema(CheckInvitationResultSchema(), 200, description="")
async def invitations_check(request: web.BaseRequest):
    """
    Request handler for checking an invitation URL.

    Args:
        request: aiohttp request object

    Returns:
        The label and details of the invitation

    """
    parser = request.app[INVITATION_PARSER]
    try:
        body = await request.json()
        invitation_url = body["invitationUrl"]
        if not isinstance(invitation_url, str):
            raise TypeError("invitationUrl must be a string")
    except (ValueError, TypeError, KeyError) as err:
        raise web.HTTPBadRequest(
            reason="Request must include an invitationUrl"
        ) from err

    try:
        result = await parser.check_invitation(invitation_url)
    except InvitationError as err:
        raise web.HTTPBadRequest(reason=err.roll_up) from err
    if not result:
        raise web.HTTPNotFound(reason="No usable invitation found")

    return web.json_response(result.serialize())


async def register(app: web.Application):
    """Register routes."""

    app.add_routes([web.post("/invitations/check", invitations_check)])


def post_process_routes(app: web.Application):
    """Amend swagger API."""

    # Add top-level tags description
    if "tags" not in app._state["swagger_dict"]:
        app._state["swagger_dict"]["tags"] = []
    app._state["swagger_dict"]["tags"].append(
        {
            "name": "invitation",
            "description": "Invitation URL resolution",
            "externalDocs": {"description": "Specification", "url": SPEC_URI},
        }
    )
