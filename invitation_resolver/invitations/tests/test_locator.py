import asyncio

from unittest import IsolatedAsyncioTestCase, mock

from aiohttp import ClientConnectionError, web
from aiohttp.test_utils import AioHTTPTestCase

from .. import locator as test_module
from ..locator import InvitationLocator, parse_url

BLOCK = "eyJsYWJlbCI6ICJBbGljZSJ9"


class TestParseUrl(IsolatedAsyncioTestCase):
    def test_parse_url(self):
        assert parse_url("https://example.org/accept?c_i=abc").hostname == (
            "example.org"
        )
        assert parse_url("http://localhost:8020").port == 8020
        for url in (
            None,
            "",
            "example.org/accept?c_i=abc",
            "/accept?c_i=abc",
            "ftp://example.org/file",
            "didcomm://invite?c_i=abc",
            "https://",
            "http://example.org:notaport/",
            "http://[::1/",
        ):
            assert parse_url(url) is None, url


class TestLocateDirect(IsolatedAsyncioTestCase):
    def test_param_order(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/?c_i=one&d_m=two&oob=three") == "one"
        assert locate("https://example.org/?oob=three&d_m=two&c_i=one") == "one"
        assert locate("https://example.org/?oob=three&d_m=two") == "two"
        assert locate("https://example.org/?oob=three") == "three"

    def test_empty_params_skipped(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/?c_i=&d_m=two") == "two"
        assert locate("https://example.org/?c_i=&d_m=&oob=") is None
        assert locate("https://example.org/?c_i&oob=three") == "three"

    def test_first_value_wins(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/?c_i=one&c_i=two") == "one"

    def test_case_sensitive(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/?C_I=one&OOB=two") is None

    def test_nothing_found(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/accept") is None
        assert locate("https://example.org/accept?other=value") is None
        assert locate("not a url?c_i=one") is None

    def test_base64_chars_kept(self):
        locate = InvitationLocator.locate_direct
        assert locate("https://example.org/?c_i=ab+c/d==") == "ab+c/d=="
        assert locate("https://example.org/?c_i=ab%2Bc%2Fd%3D%3D") == "ab+c/d=="


class TestLocateViaRedirect(AioHTTPTestCase):
    async def setUpAsync(self):
        self.calls = []
        await super().setUpAsync()

    async def get_application(self):
        app = web.Application()
        app.add_routes(
            [
                web.get("/short", self.redirect_route),
                web.get("/short-permanent", self.permanent_redirect_route),
                web.get("/short-relative", self.relative_redirect_route),
                web.get("/short-missing", self.missing_location_route),
                web.get("/short-bad", self.bad_location_route),
                web.get("/short-twice", self.double_redirect_route),
                web.get("/short-empty", self.empty_target_route),
                web.get("/accept", self.accept_route),
                web.get("/plain", self.plain_route),
            ]
        )
        return app

    def server_url(self, path: str) -> str:
        return str(self.server.make_url(path))

    async def redirect_route(self, request):
        self.calls.append(request.path)
        raise web.HTTPFound(f"{self.server_url('/accept')}?c_i={BLOCK}&oob=other")

    async def permanent_redirect_route(self, request):
        self.calls.append(request.path)
        raise web.HTTPPermanentRedirect(f"https://example.org/?d_m={BLOCK}")

    async def relative_redirect_route(self, request):
        self.calls.append(request.path)
        raise web.HTTPFound(f"/accept?c_i={BLOCK}")

    async def missing_location_route(self, request):
        self.calls.append(request.path)
        return web.Response(status=302)

    async def bad_location_route(self, request):
        self.calls.append(request.path)
        return web.Response(status=302, headers={"Location": "mailto:a@example.org"})

    async def double_redirect_route(self, request):
        self.calls.append(request.path)
        raise web.HTTPFound(self.server_url("/short"))

    async def empty_target_route(self, request):
        self.calls.append(request.path)
        raise web.HTTPFound(self.server_url("/accept"))

    async def accept_route(self, request):
        self.calls.append(request.path)
        return web.Response(text="accepted")

    async def plain_route(self, request):
        self.calls.append(request.path)
        return web.Response(text=f"c_i={BLOCK}")

    async def test_redirect(self):
        locator = InvitationLocator(self.client.session)
        result = await locator.locate_via_redirect(self.server_url("/short"))
        assert result == BLOCK
        assert self.calls == ["/short"]

    async def test_redirect_permanent(self):
        locator = InvitationLocator(self.client.session)
        result = await locator.locate_via_redirect(self.server_url("/short-permanent"))
        assert result == BLOCK

    async def test_redirect_single_hop(self):
        locator = InvitationLocator(self.client.session)
        result = await locator.locate_via_redirect(self.server_url("/short-twice"))
        assert result is None
        assert self.calls == ["/short-twice"]

    async def test_redirect_target_without_block(self):
        locator = InvitationLocator(self.client.session)
        result = await locator.locate_via_redirect(self.server_url("/short-empty"))
        assert result is None
        assert self.calls == ["/short-empty"]

    async def test_redirect_bad_location(self):
        locator = InvitationLocator(self.client.session)
        for path in ("/short-relative", "/short-missing", "/short-bad"):
            assert await locator.locate_via_redirect(self.server_url(path)) is None
        assert self.calls == ["/short-relative", "/short-missing", "/short-bad"]

    async def test_no_redirect(self):
        locator = InvitationLocator(self.client.session)
        for path in ("/plain", "/not-found"):
            assert await locator.locate_via_redirect(self.server_url(path)) is None
        assert self.calls == ["/plain"]

    async def test_transport_errors(self):
        session = mock.MagicMock(
            get=mock.MagicMock(side_effect=ClientConnectionError("refused"))
        )
        locator = InvitationLocator(session, request_timeout=1)
        with mock.patch.object(test_module, "LOGGER", autospec=True) as mock_logger:
            assert await locator.locate_via_redirect("https://example.org/") is None
            mock_logger.error.assert_called_once()

        session.get.side_effect = asyncio.TimeoutError()
        assert await locator.locate_via_redirect("https://example.org/") is None
        session.get.assert_called_with(
            "https://example.org/", allow_redirects=False, timeout=locator._timeout
        )

    async def test_locate_prefers_direct(self):
        session = mock.MagicMock(get=mock.MagicMock())
        locator = InvitationLocator(session)
        assert await locator.locate(f"https://example.org/?oob={BLOCK}") == BLOCK
        session.get.assert_not_called()

    async def test_locate_falls_back_to_redirect(self):
        locator = InvitationLocator(self.client.session)
        assert await locator.locate(self.server_url("/short")) == BLOCK
        assert await locator.locate(self.server_url("/plain")) is None
        assert self.calls == ["/short", "/plain"]
