"""Connection invitation as received, shaped for connection establishment."""

import json
from typing import Sequence

from marshmallow import EXCLUDE, fields, pre_load

from ...messaging.models.base import BaseModel, BaseModelSchema
from ..message_types import CONNECTION_INVITATION


class ReceiveInvitationRequest(BaseModel):
    """Connection invitation details handed to the connection subsystem."""

    class Meta:
        """ReceiveInvitationRequest metadata."""

        schema_class = "ReceiveInvitationRequestSchema"

    def __init__(
        self,
        *,
        _id: str = None,
        _type: str = None,
        label: str = None,
        did: str = None,
        recipient_keys: Sequence[str] = None,
        endpoint: str = None,
        routing_keys: Sequence[str] = None,
        image_url: str = None,
    ):
        """
        Initialize a receive invitation request.

        Args:
            _id: Message identifier of the invitation
            _type: Message type of the invitation
            label: Optional label for connection invitation
            did: DID for this connection invitation
            recipient_keys: List of recipient keys
            endpoint: Endpoint which the inviter can be reached at
            routing_keys: List of routing keys
            image_url: Optional image URL for connection invitation
        """
        super().__init__()
        self._id = _id
        self._type = _type
        self.label = label
        self.did = did
        self.recipient_keys = list(recipient_keys) if recipient_keys else None
        self.endpoint = endpoint
        self.routing_keys = list(routing_keys) if routing_keys else None
        self.image_url = image_url


class ReceiveInvitationRequestSchema(BaseModelSchema):
    """
    Receive invitation request schema.

    Lenient by intent: unknown keys are dropped and no field is required, so
    any invitation whose @type already matched can be shaped.
    """

    class Meta:
        """ReceiveInvitationRequestSchema metadata."""

        model_class = ReceiveInvitationRequest
        unknown = EXCLUDE

    @pre_load
    def stringify_scalars(self, data, **kwargs):
        """Read numbers and booleans as their JSON text where a string is expected."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, field in self.fields.items():
            key = field.data_key or name
            if key not in data:
                continue
            if isinstance(field, fields.Str):
                data[key] = _stringify(data[key])
            elif isinstance(field, fields.List) and isinstance(data[key], list):
                data[key] = [_stringify(value) for value in data[key]]
        return data

    _id = fields.Str(
        data_key="@id",
        required=False,
        allow_none=True,
        metadata={
            "description": "Message identifier",
            "example": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        },
    )
    _type = fields.Str(
        data_key="@type",
        required=False,
        allow_none=True,
        metadata={"description": "Message type", "example": CONNECTION_INVITATION},
    )
    label = fields.Str(
        required=False,
        allow_none=True,
        metadata={
            "description": "Optional label for connection invitation",
            "example": "Bob",
        },
    )
    did = fields.Str(
        required=False,
        allow_none=True,
        metadata={"description": "DID for connection invitation"},
    )
    recipient_keys = fields.List(
        fields.Str(metadata={"description": "Recipient public key"}),
        data_key="recipientKeys",
        required=False,
        allow_none=True,
        metadata={"description": "List of recipient keys"},
    )
    endpoint = fields.Str(
        data_key="serviceEndpoint",
        required=False,
        allow_none=True,
        metadata={
            "description": "Service endpoint at which to reach the inviter",
            "example": "http://192.168.56.101:8020",
        },
    )
    routing_keys = fields.List(
        fields.Str(metadata={"description": "Routing key"}),
        data_key="routingKeys",
        required=False,
        allow_none=True,
        metadata={"description": "List of routing keys"},
    )
    image_url = fields.Str(
        data_key="imageUrl",
        required=False,
        allow_none=True,
        metadata={
            "description": "Optional image URL for connection invitation",
            "example": "http://192.168.56.101/img/logo.jpg",
        },
    )


def _stringify(value):
    # objects and arrays stay as they are and fail validation
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return value
