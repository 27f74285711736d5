"""
One-time password sign-in.

Codes are persisted in MongoDB (hashed, one per email) so any app instance
can verify a code another instance sent. Expired codes are rejected here
and removed by the TTL index.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import timedelta

from skillsync.core.auth import create_access_token
from skillsync.core.config import get_settings
from skillsync.core.errors import ResourceNotFound, ValidationFailed
from skillsync.services.mail_service import send_otp_email
from skillsync.services.mongo_service import OtpCodeService, utcnow
from skillsync.services.postgres_service import UserService

logger = logging.getLogger(__name__)

NO_ACCOUNT = "No account found with this email. Please sign up first."


def hash_code(email: str, code: str) -> str:
    return hashlib.sha256(f"{email}:{code}".encode()).hexdigest()


def generate_code() -> str:
    """Six digits, never starting with 0."""
    return str(100000 + secrets.randbelow(900000))


class OtpService:

    def __init__(self):
        self.settings = get_settings()
        self.codes = OtpCodeService()
        self.users = UserService()

    def send(self, email: str) -> None:
        email = email.lower()
        if not self.users.get_by_email(email):
            raise ResourceNotFound(NO_ACCOUNT)

        code = generate_code()
        expires_at = utcnow() + timedelta(minutes=self.settings.otp_expire_minutes)
        self.codes.store(email, hash_code(email, code), expires_at)

        send_otp_email(email, code)

    def verify(self, email: str, code: str) -> dict:
        """
        Check a code and issue a token.

        Returns:
            {"access_token": "...", "user_id": n}
        """
        email = email.lower()
        entry = self.codes.get(email)
        if not entry or entry["expires_at"] < utcnow():
            raise ValidationFailed("OTP expired or not found")

        if not code or not hmac.compare_digest(entry["code_hash"], hash_code(email, code.strip())):
            raise ValidationFailed("Invalid OTP")

        user = self.users.get_by_email(email)
        if not user:
            raise ResourceNotFound(NO_ACCOUNT)

        self.codes.delete(email)
        logger.info("OTP sign-in for user %s", user["user_id"])
        token = create_access_token(data={"sub": str(user["user_id"])})
        return {"access_token": token, "user_id": user["user_id"]}


def get_otp_service() -> OtpService:
    return OtpService()
