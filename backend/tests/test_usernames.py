"""Username derivation and collision resolution."""

from datetime import date, datetime

from hornethive.errors import StoreError
from hornethive.services.usernames import (
    UsernameAllocator,
    derive_base_username,
    resolve_unique_username,
)


def lookup_from(existing):
    async def lookup(prefix):
        return [name for name in existing if name.lower().startswith(prefix.lower())]
    return lookup


# --- derive_base_username -----------------------------------------------------

def test_derive_concatenates_initial_surname_month_year():
    assert derive_base_username("Jane", "Doe", date(2024, 3, 5)) == "jdoe0324"


def test_derive_strips_whitespace_and_lowercases():
    username = derive_base_username("  alice ", " Van Der Berg ", datetime(2009, 11, 30, 23, 59))
    assert username == "avanderberg1109"


def test_derive_is_deterministic():
    when = date(2031, 1, 2)
    assert derive_base_username("Émile", "Zola", when) == derive_base_username("Émile", "Zola", when)


def test_derive_with_empty_names_keeps_date_suffix():
    assert derive_base_username("", "", date(2025, 1, 1)) == "0125"
    assert derive_base_username(None, None, date(2025, 12, 1)) == "1225"


def test_derive_defaults_to_current_month():
    now = datetime.now()
    assert derive_base_username("Bo", "Li").endswith(now.strftime("%m%y"))


# --- resolve_unique_username --------------------------------------------------

async def test_resolve_returns_desired_when_store_is_empty():
    assert await resolve_unique_username("abc01", lookup_from(set())) == "abc01"


async def test_resolve_appends_2_on_first_collision():
    assert await resolve_unique_username("abc01", lookup_from({"abc01"})) == "abc01-2"


async def test_resolve_skips_taken_suffixes():
    existing = {"abc01", "abc01-2"}
    assert await resolve_unique_username("abc01", lookup_from(existing)) == "abc01-3"


async def test_resolve_finds_gap_in_suffixes():
    existing = {"abc01", "abc01-3"}
    assert await resolve_unique_username("abc01", lookup_from(existing)) == "abc01-2"


async def test_resolve_compares_case_insensitively():
    existing = {"ABC01", "Abc01-2"}
    assert await resolve_unique_username("abc01", lookup_from(existing)) == "abc01-3"


async def test_resolve_keeps_desired_when_only_longer_names_match_prefix():
    existing = {"abc011", "abc01x"}
    assert await resolve_unique_username("abc01", lookup_from(existing)) == "abc01"


async def test_resolve_keeps_desired_when_lookup_fails():
    async def broken(prefix):
        raise StoreError("timeout")

    assert await resolve_unique_username("abc01", broken) == "abc01"


async def test_resolve_ignores_null_usernames():
    async def lookup(prefix):
        return [None, "abc01"]

    assert await resolve_unique_username("abc01", lookup) == "abc01-2"


# --- UsernameAllocator --------------------------------------------------------

async def test_allocator_derives_and_resolves_against_store(store):
    store.add(email="a@x.test", username="jdoe0324")
    allocator = UsernameAllocator(store)

    assert await allocator.allocate("Jane", "Doe", date(2024, 3, 1)) == "jdoe0324-2"
    assert await allocator.allocate("John", "Smith", date(2024, 3, 1)) == "jsmith0324"
