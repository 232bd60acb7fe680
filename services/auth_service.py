"""
Admin authentication through Supabase Auth.

Admins sign in with email and password; every admin request then carries
the issued access token, which is validated against Supabase Auth.

The shared client never holds a user session. Sign-in runs on a
throwaway client and sign-out revokes the caller's token by value.
"""

from typing import Optional
import structlog

from config import get_supabase_client, create_session_client
from models.auth import AdminUser, SessionResponse
from exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


class AuthService:
    """Sign in, sign out and token validation."""

    def __init__(self):
        self.db = get_supabase_client()

    def sign_in(self, email: str, password: str) -> SessionResponse:
        """
        Exchange credentials for a session.

        Raises:
            AuthenticationError: If credentials are rejected
        """
        logger.info("admin_sign_in", email=email)

        try:
            client = create_session_client()
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning("admin_sign_in_failed", email=email, error=str(e))
            raise AuthenticationError("Invalid email or password")

        session = getattr(response, "session", None)
        user = getattr(response, "user", None)
        if session is None or user is None:
            logger.warning("admin_sign_in_no_session", email=email)
            raise AuthenticationError("Invalid email or password")

        logger.info("admin_signed_in", user_id=user.id)

        return SessionResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=user.id,
            email=user.email,
        )

    def get_user(self, access_token: Optional[str]) -> AdminUser:
        """
        Resolve the admin behind an access token.

        Raises:
            AuthenticationError: If the token is missing, expired or invalid
        """
        if not access_token:
            raise AuthenticationError()

        try:
            response = self.db.auth.get_user(access_token)
        except Exception as e:
            logger.warning("token_validation_failed", error=str(e))
            raise AuthenticationError("Invalid or expired session")

        user = getattr(response, "user", None)
        if user is None:
            raise AuthenticationError("Invalid or expired session")

        return AdminUser(id=user.id, email=user.email)

    def sign_out(self, access_token: Optional[str]) -> None:
        """
        Revoke the session behind an access token.

        Raises:
            AuthenticationError: If the token is missing or revocation fails
        """
        if not access_token:
            raise AuthenticationError()

        logger.info("admin_sign_out")
        try:
            # Authorised by the user's own JWT; the client's session is untouched
            self.db.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.warning("admin_sign_out_failed", error=str(e))
            raise AuthenticationError("Sign out failed")


# Singleton instance for convenience
_auth_service: Optional[AuthService] = None

def get_auth_service() -> AuthService:
    """Get or create AuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
