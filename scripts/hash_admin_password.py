#!/usr/bin/env python3
"""Print a value for ADMIN_PASSWORD_HASH."""
from __future__ import annotations

import argparse
import getpass

from app.infrastructure.auth.passwords import hash_password


def main() -> None:
    parser = argparse.ArgumentParser(description="Hash the admin password for the .env file")
    parser.add_argument("--password", default="", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 8:
        print("Use at least 8 characters.")
        return
    print(f"ADMIN_PASSWORD_HASH={hash_password(password)}")


if __name__ == "__main__":
    main()
