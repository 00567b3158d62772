import json

from unittest import IsolatedAsyncioTestCase, mock

from aiohttp import web

from ...core.error import InvitationError
from .. import routes as test_module
from ..models.invitation import CheckInvitationResult
from ..parser import InvitationParser

INVITATION_URL = "https://example.org/accept?c_i=e30="


class TestInvitationRoutes(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.parser = mock.MagicMock(InvitationParser)
        self.parser.check_invitation = mock.AsyncMock()
        self.request = mock.MagicMock(
            app={test_module.INVITATION_PARSER: self.parser},
            json=mock.AsyncMock(return_value={"invitationUrl": INVITATION_URL}),
        )

    async def test_check(self):
        self.parser.check_invitation.return_value = CheckInvitationResult(
            label="Alice", invitation={"label": "Alice"}, invitation_block="e30="
        )
        response = await test_module.invitations_check(self.request)
        assert response.status == 200
        assert json.loads(response.body) == {
            "label": "Alice",
            "invitation": {"label": "Alice"},
            "invitationBlock": "e30=",
        }
        self.parser.check_invitation.assert_awaited_once_with(INVITATION_URL)

    async def test_check_error(self):
        self.parser.check_invitation.side_effect = InvitationError(
            "Out of band Invitations are currently not supported"
        )
        with self.assertRaises(web.HTTPBadRequest) as context:
            await test_module.invitations_check(self.request)
        assert "not supported" in context.exception.reason

    async def test_check_not_found(self):
        self.parser.check_invitation.return_value = None
        with self.assertRaises(web.HTTPNotFound):
            await test_module.invitations_check(self.request)

    async def test_check_bad_request_body(self):
        for body in ({}, {"invitationUrl": 12}, ["not", "a", "dict"]):
            self.request.json = mock.AsyncMock(return_value=body)
            with self.assertRaises(web.HTTPBadRequest):
                await test_module.invitations_check(self.request)

        self.request.json = mock.AsyncMock(side_effect=json.JSONDecodeError("x", "", 0))
        with self.assertRaises(web.HTTPBadRequest):
            await test_module.invitations_check(self.request)
        self.parser.check_invitation.assert_not_awaited()

    async def test_register(self):
        mock_app = mock.MagicMock()
        mock_app.add_routes = mock.MagicMock()

        await test_module.register(mock_app)
        mock_app.add_routes.assert_called_once()

    async def test_post_process_routes(self):
        mock_app = mock.MagicMock(_state={"swagger_dict": {}})
        test_module.post_process_routes(mock_app)
        assert "tags" in mock_app._state["swagger_dict"]
        assert mock_app._state["swagger_dict"]["tags"][0]["name"] == "invitation"
