#!/usr/bin/env python
"""Seed script to create the initial superuser.

Every API call needs a token, so the first superuser and its token have to
be created out of band. Run this once after the migrations; further users
are created through ``POST /api/user/new``.

Usage:
    python scripts/seed_superuser.py

Environment Variables:
    DATABASE_URL: PostgreSQL connection string
    SUPERUSER_NAME: Username for the superuser (default: admin)
    SUPERUSER_TOKEN_LABEL: Label of the first token (default: bootstrap)
"""

import os
import sys

from mailconfig.database import get_db_session
from mailconfig.errors import MailConfigError
from mailconfig.users.service import seed_superuser


def main():
    """Create the initial superuser and print its token."""
    username = os.getenv("SUPERUSER_NAME", "admin")
    label = os.getenv("SUPERUSER_TOKEN_LABEL", "bootstrap")

    try:
        with get_db_session() as session:
            user, token = seed_superuser(session, username, label)
            token_value = token.token
    except MailConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print("Superuser created")
    print(f"  Username: {username}")
    print(f"  Token ({label}): {token_value}")
    print()
    print("Use it as: Authorization: Bearer <token>")


if __name__ == "__main__":
    main()
