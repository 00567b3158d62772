"""Message type identifiers for invitations."""

from enum import Enum

from ..protocols.didcomm_prefix import DIDCommPrefix

SPEC_URI = (
    "https://github.com/hyperledger/aries-rfcs/tree/"
    "9b0aaa39df7e8bd434126c4b33c097aae78d65bf/features/0160-connection-protocol"
)

# Message types
CONNECTION_INVITATION = DIDCommPrefix.OLD.qualify("connections/1.0/invitation")
OOB_INVITATION = DIDCommPrefix.OLD.qualify("out-of-band/1.0/invitation")

# Query parameters carrying an invitation block, most preferred first
INVITATION_PARAMS = ("c_i", "d_m", "oob")


class InvitationType(Enum):
    """Closed set of invitation variants recognized by their @type."""

    CONNECTION = CONNECTION_INVITATION
    OUT_OF_BAND = OOB_INVITATION
    UNKNOWN = None

    @classmethod
    def get(cls, message_type) -> "InvitationType":
        """Classify a @type value; anything but an exact match is UNKNOWN."""
        for member in (cls.CONNECTION, cls.OUT_OF_BAND):
            if message_type == member.value:
                return member
        return cls.UNKNOWN
