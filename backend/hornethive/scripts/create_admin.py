"""
Create Admin User Script
Creates an approved administrator account if the email is not registered yet.
Usage: ADMIN_EMAIL=... ADMIN_PASSWORD=... python -m hornethive.scripts.create_admin
"""

import asyncio
import logging
import os

from hornethive.config import settings
from hornethive.database import AsyncSessionLocal
from hornethive.services.password_hasher import password_hasher
from hornethive.services.user_store import SqlAlchemyUserStore
from hornethive.services.usernames import UsernameAllocator
from hornethive.utils.dates import add_months, utc_now

logger = logging.getLogger(__name__)


async def create_admin(store=None) -> bool:
    store = store or SqlAlchemyUserStore(AsyncSessionLocal)

    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        logger.error("ADMIN_EMAIL and ADMIN_PASSWORD are required to create the admin user.")
        return False

    if await store.get_by_email(email) is not None:
        logger.info(f"Admin user {email} already exists.")
        return False

    first_name = os.getenv("ADMIN_FIRST_NAME", "Hive")
    last_name = os.getenv("ADMIN_LAST_NAME", "Admin")
    username = await UsernameAllocator(store).allocate(first_name, last_name)

    now = utc_now()
    await store.insert({
        "email": email,
        "username": username,
        "first_name": first_name,
        "last_name": last_name,
        "password": password_hasher.hash(password),
        "role": "admin",
        "approved": True,
        "active": True,
        "password_fresh": now,
        "password_expire": add_months(now, settings.password_max_age_months),
    })
    logger.info(f"Successfully created admin user: {username} <{email}>")
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_admin())
