"""
Authentication Gate

Turns the credential carried by a request into an Identity.
Both failure cases are ordinary results, never exceptions.
"""

from typing import TYPE_CHECKING, Optional

from lead_admin.libs.result import Error, Result, Return

from .identity import Identity

if TYPE_CHECKING:
    from lead_admin.api.utils.jwt import SessionTokenCodec

MISSING_CREDENTIAL = Error("MISSING_CREDENTIAL", "Missing authentication cookie")
INVALID_OR_EXPIRED = Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired token")


class AuthenticationGate:
    def __init__(self, codec: "SessionTokenCodec"):
        self.codec = codec

    def authenticate(self, token: Optional[str]) -> Result[Identity]:
        if not token:
            return Return.err(MISSING_CREDENTIAL)

        identity = self.codec.verify(token)
        if identity is None:
            return Return.err(INVALID_OR_EXPIRED)

        return Return.ok(identity)
