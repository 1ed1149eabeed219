#!/usr/bin/env python3
"""Create or reset the admin panel account.

Upserts by email: a new row is inserted with role=admin, an existing row
gets the new password hash, name and role=admin.

Usage:
    cd backend && python scripts/create_admin.py --email root@gleethreads.com --password '...'

Defaults come from ADMIN_EMAIL, ADMIN_PASSWORD and ADMIN_NAME; flags win.
DATABASE_URL and BCRYPT_ROUNDS are read the same way the API reads them.
"""

import argparse
import asyncio
import logging
import os
import sys

# Must set up path before app imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy.exc import SQLAlchemyError

from app.database import async_session_factory, dispose_engine
from app.services.auth_service import auth_service

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("create_admin")

MIN_PASSWORD_LENGTH = 8


async def create_admin(email: str, password: str, name: str) -> int:
    async with async_session_factory() as session:
        try:
            user = await auth_service.upsert_admin(session, email=email, password=password, name=name)
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise
        return user.id


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or reset the Glee Threads admin account")
    parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL"), help="Admin login email")
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"), help="Admin password")
    parser.add_argument("--name", default=os.environ.get("ADMIN_NAME", "Admin"), help="Display name")
    args = parser.parse_args()

    if not args.email or not args.password:
        parser.error("email and password are required (flags or ADMIN_EMAIL / ADMIN_PASSWORD)")
    if len(args.password) < MIN_PASSWORD_LENGTH:
        parser.error(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

    async def run() -> int:
        try:
            return await create_admin(args.email.strip(), args.password, args.name)
        finally:
            await dispose_engine()

    try:
        user_id = asyncio.run(run())
    except SQLAlchemyError as e:
        log.error("Could not write admin account: %s", e)
        return 1

    log.info("Admin account ready: id=%s email=%s", user_id, args.email.strip())
    return 0


if __name__ == "__main__":
    sys.exit(main())
