"""Invitation resolution results."""

from typing import Mapping

from marshmallow import EXCLUDE, fields

from ...messaging.models.base import BaseModel, BaseModelSchema
from .receive_invitation import ReceiveInvitationRequest, ReceiveInvitationRequestSchema


class Invitation(BaseModel):
    """
    Outcome of decoding and classifying one invitation block.

    Callers check `error` first: it is set whenever a stage failed or the
    variant is not supported, and `invitation_request` is only set for a
    connection invitation.
    """

    class Meta:
        """Invitation metadata."""

        schema_class = "InvitationSchema"

    def __init__(
        self,
        *,
        oob: bool = False,
        parsed: bool = False,
        invitation_request: ReceiveInvitationRequest = None,
        error: str = None,
        invitation_block: str = None,
        invitation: Mapping = None,
    ):
        """
        Initialize an invitation result.

        Args:
            oob: Whether the @type identified an out-of-band invitation
            parsed: Whether the decoded block parsed as a JSON object
            invitation_request: Shaped connection invitation, if supported
            error: Reason the invitation is unusable
            invitation_block: The base64 block as found in the URL
            invitation: The decoded JSON object, verbatim
        """
        super().__init__()
        self.oob = oob
        self.parsed = parsed
        self.invitation_request = invitation_request
        self.error = error
        self.invitation_block = invitation_block
        self.invitation = dict(invitation) if invitation is not None else None


class InvitationSchema(BaseModelSchema):
    """Invitation result schema."""

    class Meta:
        """InvitationSchema metadata."""

        model_class = Invitation
        unknown = EXCLUDE

    oob = fields.Bool(
        required=False,
        metadata={"description": "Out-of-band invitation flag", "example": False},
    )
    parsed = fields.Bool(
        required=False,
        metadata={"description": "Invitation block parsed as JSON", "example": True},
    )
    invitation_request = fields.Nested(
        ReceiveInvitationRequestSchema(),
        data_key="invitationRequest",
        required=False,
        allow_none=True,
    )
    error = fields.Str(
        required=False,
        allow_none=True,
        metadata={
            "description": "Reason the invitation cannot be used",
            "example": "Invitation was empty",
        },
    )
    invitation_block = fields.Str(
        data_key="invitationBlock",
        required=False,
        allow_none=True,
        metadata={"description": "Base64 invitation block from the URL"},
    )
    invitation = fields.Dict(
        required=False,
        allow_none=True,
        metadata={"description": "Decoded invitation document"},
    )


class CheckInvitationResult(BaseModel):
    """Usable invitation, as presented to the caller."""

    class Meta:
        """CheckInvitationResult metadata."""

        schema_class = "CheckInvitationResultSchema"

    def __init__(
        self,
        *,
        label: str = None,
        invitation: Mapping = None,
        invitation_block: str = None,
    ):
        """Initialize a check invitation result."""
        super().__init__()
        self.label = label
        self.invitation = dict(invitation) if invitation is not None else None
        self.invitation_block = invitation_block


class CheckInvitationResultSchema(BaseModelSchema):
    """Check invitation result schema."""

    class Meta:
        """CheckInvitationResultSchema metadata."""

        model_class = CheckInvitationResult
        unknown = EXCLUDE

    label = fields.Str(
        required=False,
        allow_none=True,
        metadata={"description": "Label of the inviter", "example": "Alice"},
    )
    invitation = fields.Dict(
        required=False,
        metadata={"description": "Decoded invitation document"},
    )
    invitation_block = fields.Str(
        data_key="invitationBlock",
        required=False,
        metadata={"description": "Base64 invitation block from the URL"},
    )
