#!/usr/bin/env python3
"""
Create an administrator account.

Registration through the API always creates plain users; this script is
the way to bootstrap the first admin.

Usage:
    python scripts/create_admin.py --name Admin --email admin@example.com
"""

import argparse
import getpass
import sys

from storefront.core.config import get_settings
from storefront.database import UserDatabase, create_client, ensure_indexes
from storefront.exceptions import ConflictError
from storefront.models.user import UserRole
from storefront.security.passwords import hash_password


def main():
    parser = argparse.ArgumentParser(description="Create a storefront administrator")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if len(password) < 6:
        print("✗ Password must be at least 6 characters")
        sys.exit(1)

    settings = get_settings()
    client = create_client(settings)
    try:
        db = client[settings.mongo_database]
        ensure_indexes(db)
        users = UserDatabase(db["users"])

        try:
            user = users.create_user(
                name=args.name,
                email=args.email,
                password_hash=hash_password(password),
                role=UserRole.ADMIN,
            )
        except ConflictError:
            print(f"✗ A user with email {args.email} already exists")
            sys.exit(1)
        print(f"✓ Created admin {user.email} ({user.id})")
    finally:
        client.close()


if __name__ == "__main__":
    main()
