"""
Mail delivery through the Resend Python SDK.
"""

import logging

import resend

from skillsync.core.config import get_settings
from skillsync.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def format_otp_email(code: str, expire_minutes: int) -> str:
    """HTML body for the sign-in code email."""
    return f"""
    <div style="font-family: 'Segoe UI', Arial, sans-serif; background: #f4f8fb; padding: 32px; border-radius: 12px; max-width: 420px; margin: 0 auto;">
        <h1 style="color: #0190fe; text-align: center;">Welcome to SkillSync!</h1>
        <p style="text-align: center;">Your one-time password (OTP) is:</p>
        <div style="background: #3b82f6; color: #fff; font-size: 2rem; font-weight: bold; letter-spacing: 4px; padding: 16px 0; border-radius: 8px; text-align: center;">
            {code}
        </div>
        <p style="text-align: center;">
            Enter this code to sign in. This code will expire in {expire_minutes} minutes.<br><br>
            <span style="color: #6b7280;">If you did not request this, you can safely ignore this email.</span>
        </p>
    </div>
    """


def send_otp_email(recipient_email: str, code: str) -> None:
    """
    Send a sign-in code.

    Raises:
        UpstreamError when the API key is missing or Resend rejects the request
    """
    settings = get_settings()
    if not settings.resend_api_key:
        logger.error("Resend API key is missing; OTP email to %s not sent", recipient_email)
        raise UpstreamError("Failed to send OTP email")

    resend.api_key = settings.resend_api_key
    try:
        resend.Emails.send({
            "from": settings.mail_from,
            "to": [recipient_email],
            "subject": "Your SkillSync OTP Code",
            "text": f"Your OTP code is: {code}",
            "html": format_otp_email(code, settings.otp_expire_minutes)
        })
    except Exception as e:
        logger.error("Resend email failure for %s: %s", recipient_email, e)
        raise UpstreamError("Failed to send OTP email")

    logger.info("Sent OTP email to %s", recipient_email)
