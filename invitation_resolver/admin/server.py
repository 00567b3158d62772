"""Admin server classes."""

import logging

from aiohttp import ClientSession, web
from aiohttp_apispec import docs, response_schema, setup_aiohttp_apispec
from marshmallow import fields

from ..config.base import BaseSettings
from ..config.argparse import DEFAULT_INVITATION_TIMEOUT
from ..core.error import BaseError
from ..invitations import routes as invitation_routes
from ..invitations.locator import InvitationLocator
from ..invitations.parser import InvitationParser
from ..messaging.models.openapi import OpenAPISchema
from ..version import __version__

LOGGER = logging.getLogger(__name__)

HTTP_SESSION = web.AppKey("http_session", ClientSession)


class AdminSetupError(BaseError):
    """Admin server setup or configuration error."""


class AdminStatusSchema(OpenAPISchema):
    """Schema for the status endpoint."""

    version = fields.Str(metadata={"description": "Version code"})


class AdminServer:
    """Admin HTTP server class."""

    def __init__(self, host: str, port: int, settings: BaseSettings):
        """
        Initialize an AdminServer instance.

        Args:
            host: Host to listen on
            port: Port to listen on
            settings: The application settings
        """
        self.host = host
        self.port = port
        self.settings = settings
        self.app = None
        self.runner = None
        self.site = None

    async def make_application(self) -> web.Application:
        """Get the aiohttp application instance."""

        app = web.Application()

        # one client session serves every request until the app is cleaned up
        session = ClientSession(trust_env=True)
        locator = InvitationLocator(
            session,
            request_timeout=self.settings.get_int(
                "invitations.request_timeout", default=DEFAULT_INVITATION_TIMEOUT
            ),
        )
        app[HTTP_SESSION] = session
        app[invitation_routes.INVITATION_PARSER] = InvitationParser(locator)

        app.add_routes([web.get("/status", self.status_handler, allow_head=False)])
        await invitation_routes.register(app)

        setup_aiohttp_apispec(
            app=app,
            title="Invitation Resolver",
            version=f"v{__version__}",
            swagger_path="/api/doc",
        )
        app.on_cleanup.append(self.on_cleanup)
        return app

    async def start(self) -> None:
        """
        Start the webserver.

        Raises:
            AdminSetupError: If there was an error starting the webserver

        """
        self.app = await self.make_application()
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        invitation_routes.post_process_routes(self.app)

        self.site = web.TCPSite(self.runner, host=self.host, port=self.port)

        try:
            await self.site.start()
        except OSError as e:
            LOGGER.error(
                "Unable to start admin server at %s:%s", self.host, self.port
            )
            raise AdminSetupError(
                "Unable to start webserver with host "
                + f"'{self.host}' and port '{self.port}'\n"
            ) from e
        LOGGER.info("Admin server listening at http://%s:%s", self.host, self.port)

    async def stop(self) -> None:
        """Stop the webserver."""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            self.site = None

    async def on_cleanup(self, app: web.Application):
        """Close the shared HTTP client session."""
        session = app.get(HTTP_SESSION)
        if session:
            await session.close()

    @docs(tags=["server"], summary="Fetch the server status")
    @response_schema(AdminStatusSchema(), 200, description="")
    async def status_handler(self, request: web.BaseRequest):
        """
        Request handler for the server status information.

        Args:
            request: aiohttp request object

        Returns:
            The web response

        """
        return web.json_response({"version": __version__})
