import pytest
import resend

from skillsync.core.config import get_settings
from skillsync.core.errors import UpstreamError
from skillsync.services import mail_service


@pytest.fixture
def outbox(monkeypatch):
    sent = []
    monkeypatch.setattr(get_settings(), "resend_api_key", "re_test_key")
    monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params) or {"id": "email_1"})
    return sent


def test_sends_code(outbox):
    mail_service.send_otp_email("student@example.com", "482913")

    assert len(outbox) == 1
    message = outbox[0]
    assert message["to"] == ["student@example.com"]
    assert message["subject"] == "Your SkillSync OTP Code"
    assert "482913" in message["text"]
    assert "482913" in message["html"]
    assert "expire in 5 minutes" in message["html"]


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(get_settings(), "resend_api_key", "")
    with pytest.raises(UpstreamError):
        mail_service.send_otp_email("student@example.com", "482913")


def test_provider_failure(outbox, monkeypatch):
    def reject(params):
        raise ValueError("domain not verified")

    monkeypatch.setattr(resend.Emails, "send", reject)
    with pytest.raises(UpstreamError):
        mail_service.send_otp_email("student@example.com", "482913")
