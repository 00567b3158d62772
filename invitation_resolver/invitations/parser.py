"""Decode, classify and check invitation URLs."""

import json
import logging
from typing import Optional
from urllib.parse import unquote

from typing_extensions import assert_never

from ..core.error import InvitationError
from ..messaging.models.base import BaseModelError
from ..utils.encoding import b64_to_str
from .locator import InvitationLocator, parse_url
from .message_types import InvitationType
from .models.invitation import CheckInvitationResult, Invitation
from .models.receive_invitation import ReceiveInvitationRequest

LOGGER = logging.getLogger(__name__)

OOB_NOT_SUPPORTED = "Out of band Invitations are currently not supported"


class InvitationParser:
    """Turn an invitation URL into a usable connection invitation."""

    def __init__(self, locator: InvitationLocator):
        """
        Initialize the parser.

        Args:
            locator: the locator used to find the invitation block in a URL
        """
        self._locator = locator

    async def check_invitation(
        self, invitation_url: str
    ) -> Optional[CheckInvitationResult]:
        """
        Take a url, determine if it is an invitation, and if it can be handled.

        Args:
            invitation_url: the invitation URL, possibly percent-encoded

        Returns:
            The label and invitation details, or None if the URL held nothing
            usable without reporting an error

        Raises:
            InvitationError: If the URL cannot be parsed or the invitation
                cannot be used

        """
        url = unquote(invitation_url or "")
        if not parse_url(url):
            raise InvitationError(
                "Invitation Url could not be decoded. "
                f"Cannot determine invitation details. {invitation_url}"
            )

        invitation_block = await self._locator.locate(url)
        invite = self.parse_invitation(invitation_block)

        if invite.error:
            raise InvitationError(invite.error)
        if invite.parsed and invite.invitation_request:
            return CheckInvitationResult(
                label=invite.invitation_request.label,
                invitation=invite.invitation,
                invitation_block=invite.invitation_block,
            )

        LOGGER.warning("No usable invitation found in %s", invitation_url)
        return None

    def parse_invitation(self, invitation_block: Optional[str]) -> Invitation:
        """
        Decode and classify an invitation block.

        Never raises: every failure is reported in the `error` of the result.
        """
        if not invitation_block:
            return self._failed("Invitation was empty")

        try:
            decoded_block = b64_to_str(invitation_block)
        except ValueError as err:
            return self._failed(
                f"Invitation could not be decoded: {err}",
                invitation_block=invitation_block,
            )
        if not decoded_block:
            return self._failed(
                "Invitation could not be decoded; result was empty",
                invitation_block=invitation_block,
            )

        try:
            document = json.loads(decoded_block)
            if not isinstance(document, dict):
                raise ValueError(
                    f"expected a JSON object, found {type(document).__name__}"
                )
        except (ValueError, RecursionError) as err:
            return self._failed(
                f"Error parsing invitation {err}", invitation_block=invitation_block
            )

        message_type = document.get("@type")
        invitation_type = InvitationType.get(message_type)
        invitation_request = None
        oob = False
        error = None

        if invitation_type is InvitationType.CONNECTION:
            try:
                invitation_request = ReceiveInvitationRequest.from_json(decoded_block)
            except BaseModelError as err:
                error = f"Error parsing invitation request {err.roll_up}"
        elif invitation_type is InvitationType.OUT_OF_BAND:
            # not supported until out-of-band can be handed to the agent
            oob = True
            error = OOB_NOT_SUPPORTED
        elif invitation_type is InvitationType.UNKNOWN:
            error = f"Unknown or unsupported Invitation type. @type = '{message_type}'"
        else:
            assert_never(invitation_type)

        if error:
            LOGGER.error(error)
        return Invitation(
            oob=oob,
            parsed=True,
            invitation_request=invitation_request,
            error=error,
            invitation_block=invitation_block,
            invitation=document,
        )

    @staticmethod
    def _failed(error: str, invitation_block: str = None) -> Invitation:
        LOGGER.error(error)
        return Invitation(error=error, invitation_block=invitation_block)
