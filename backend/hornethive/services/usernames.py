"""
Username Service
Derives handles from a person's name and the current month, and resolves
collisions against names already in the store.
"""

import logging
import re
from datetime import date, datetime
from typing import Awaitable, Callable, Iterable, Optional, Union

from hornethive.errors import StoreError

logger = logging.getLogger(__name__)

PrefixLookup = Callable[[str], Awaitable[Iterable[str]]]

_WHITESPACE = re.compile(r"\s+")


def derive_base_username(
    first_name: Optional[str],
    last_name: Optional[str],
    when: Optional[Union[date, datetime]] = None,
) -> str:
    """
    Build `<first initial><last name><MM><YY>` in lowercase.

    >>> derive_base_username("Ada", "Love Lace", date(2024, 3, 9))
    'alovelace0324'
    """
    when = when or datetime.now()
    initial = (first_name or "").strip()[:1]
    surname = _WHITESPACE.sub("", last_name or "")
    return f"{initial}{surname}{when:%m}{when:%y}".lower()


async def resolve_unique_username(desired: str, lookup_by_prefix: PrefixLookup) -> str:
    """
    Return `desired` if no existing username matches it case-insensitively,
    otherwise the first free `desired-N` for N = 2, 3, ...

    Only the snapshot returned by `lookup_by_prefix` is consulted; two
    concurrent callers can be handed the same name.
    """
    try:
        rows = await lookup_by_prefix(desired)
    except StoreError as e:
        logger.warning(f"Username prefix lookup failed, keeping '{desired}': {e.detail}")
        return desired

    existing = {(name or "").lower() for name in rows or ()}
    if not existing:
        return desired

    lowered = desired.lower()
    if lowered not in existing:
        return desired

    n = 2
    while f"{lowered}-{n}" in existing:
        n += 1
    return f"{lowered}-{n}"


class UsernameAllocator:
    """Derives a base username and makes it unique against the user store."""

    def __init__(self, store):
        self.store = store

    async def allocate(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        when: Optional[Union[date, datetime]] = None,
    ) -> str:
        base = derive_base_username(first_name, last_name, when)
        username = await resolve_unique_username(base, self.store.find_usernames_with_prefix)
        if username != base:
            logger.info(f"Username '{base}' taken, allocated '{username}'")
        return username
