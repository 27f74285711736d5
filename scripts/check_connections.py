#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database, MongoDB, DeepSeek and Resend settings.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from skillsync.core.config import get_settings
from skillsync.db.mongodb import test_mongo_connection
from skillsync.db.postgres import DB_URL, is_sqlite, test_postgres_connection
from skillsync.services.deepseek_client import get_deepseek_client


def main():
    settings = get_settings()
    print("=" * 50)
    print("SKILLSYNC - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking relational database...")
    if is_sqlite:
        print(f"    URL: {DB_URL}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    OK: CONNECTED")
    else:
        print("    FAILED")

    print("\n[2] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    OK: CONNECTED")
    else:
        print("    FAILED")

    print("\n[3] Checking DeepSeek API...")
    if settings.deepseek_api_key:
        print(f"    Base URL: {settings.deepseek_base_url}")
        print(f"    Model: {settings.deepseek_model}")
        if get_deepseek_client().test_connection():
            print("    OK: CONNECTED")
        else:
            print("    FAILED")
    else:
        print("    SKIPPED: DEEPSEEK_API_KEY not configured")

    print("\n[4] Checking mail settings...")
    if settings.resend_api_key:
        print(f"    Resend key set, sending as {settings.mail_from}")
    else:
        print("    SKIPPED: RESEND_API_KEY not configured (OTP sign-in will fail)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
