"""
Password strength rules applied at registration.
"""

import re
from typing import List

# Common weak passwords to reject
COMMON_PASSWORDS = [
    "password", "12345678", "123456789", "1234567890", "qwerty123",
    "abc123", "password123", "admin123", "letmein", "welcome123",
    "monkey123", "1234567", "sunshine", "princess", "football",
    "iloveyou", "123123",
]

SPECIAL_CHARS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")


def password_problems(password: str) -> List[str]:
    """Return every rule the password breaks; empty means it is acceptable."""
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if len(password) > 128:
        errors.append("Password must be less than 128 characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    if not SPECIAL_CHARS.search(password):
        errors.append("Password must contain at least one special character (!@#$%^&*...)")

    lowered = password.lower()
    if any(common in lowered for common in COMMON_PASSWORDS):
        errors.append("Password is too common. Please choose a more unique password")

    if re.search(r"(.)\1{3,}", password):
        errors.append("Password contains too many repeated characters")

    if re.search(r"12345|abcde|qwerty", password, re.IGNORECASE):
        errors.append("Password contains common sequences")

    return errors


def password_strength(password: str) -> str:
    """weak / medium / strong, used for the registration response."""
    score = sum([
        len(password) >= 8,
        bool(re.search(r"[A-Z]", password)),
        bool(re.search(r"[a-z]", password)),
        bool(re.search(r"[0-9]", password)),
        bool(SPECIAL_CHARS.search(password)),
    ])
    if score >= 5 and len(password) >= 12:
        return "strong"
    if score >= 4 and len(password) >= 10:
        return "medium"
    return "weak"
