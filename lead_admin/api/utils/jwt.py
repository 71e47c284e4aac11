from datetime import UTC, datetime, timedelta
from typing import Callable, Optional

from jose import JWTError, jwt

from lead_admin.app.security.identity import Identity
from lead_admin.domain.entities import UserRole


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SessionTokenCodec:
    """
    Issues and verifies the signed session token carried in the auth cookie.

    Claims: sub, username, role, company_id, iat, exp (epoch seconds).
    Verification fails closed and returns None for any bad token.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.clock = clock

    def now(self) -> datetime:
        return self.clock().replace(microsecond=0)

    def identity_for(
        self,
        subject_id: str,
        username: str,
        role: UserRole,
        company_scope: Optional[int] = None,
    ) -> Identity:
        """
        Build a fresh Identity stamped with the current time.

        Expiry is fixed at issue time; there is no sliding renewal.
        """
        issued_at = self.now()
        return Identity(
            subject_id=subject_id,
            username=username,
            role=role,
            company_scope=company_scope,
            issued_at=issued_at,
            expires_at=issued_at + self.expires_in,
        )

    def issue(self, identity: Identity) -> str:
        """
        Encode an Identity as a signed token

        Args:
            identity: Verified caller identity

        Returns:
            JWT token string
        """
        payload = {
            "sub": identity.subject_id,
            "username": identity.username,
            "role": identity.role.value,
            "company_id": identity.company_scope,
            "iat": int(identity.issued_at.timestamp()),
            "exp": int(identity.expires_at.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[Identity]:
        """
        Verify and decode a token

        Args:
            token: JWT token string

        Returns:
            Identity, or None if the token is malformed, tampered with,
            carries unknown claims, or is expired at the codec's clock
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "require_iat": True,
                    "require_sub": True,
                },
            )
            if "exp" not in payload:
                return None
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
            if self.now() >= expires_at:
                return None

            company_id = payload.get("company_id")
            return Identity(
                subject_id=str(payload["sub"]),
                username=str(payload["username"]),
                role=UserRole(payload["role"]),
                company_scope=int(company_id) if company_id is not None else None,
                issued_at=issued_at,
                expires_at=expires_at,
            )
        except (JWTError, KeyError, ValueError, TypeError):
            return None
