"""Code generator and handle slugifier."""

import pytest

from config import JOIN_CODE_ALPHABET, HANDLE_MAX_LENGTH
from models.TripCrew import TripCrew
from services import invite_codes
from services.invite_codes import (
    fallback_join_code,
    generate_handle,
    generate_join_code,
    generate_unique_join_code,
    generate_unique_handle,
    looks_like_handle,
    random_join_code,
    slugify,
)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Cole Family Travel Crew", "cole-family-travel-crew"),
        ("  Beach Trip 2025!! ", "beach-trip-2025"),
        ("Rock & Roll -- Road Trip", "rock-roll-road-trip"),
        ("", "crew"),
        ("???", "crew"),
        (None, "crew"),
        ("A", "a-crew"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_slugify_truncates_without_trailing_hyphen():
    slug = slugify("word " * 40)
    assert len(slug) <= HANDLE_MAX_LENGTH
    assert not slug.endswith("-")
    assert slug.startswith("word-word")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("beach-trip-2025", True),
        ("ab", True),
        ("a", False),
        ("H7K2MQ", False),
        ("Beach-Trip", False),
        ("beach trip", False),
        ("beach_trip", False),
    ],
)
def test_looks_like_handle(value, expected):
    assert looks_like_handle(value) is expected


def test_random_code_uses_unambiguous_alphabet():
    for _ in range(200):
        code = random_join_code()
        assert len(code) == 6
        assert code == code.upper()
        assert set(code) <= set(JOIN_CODE_ALPHABET)
        assert not set(code) & set("0O1I")


def test_thousand_generated_codes_are_unique():
    registry = set()
    for _ in range(1000):
        code = generate_join_code(lambda c: c in registry)
        assert code not in registry
        registry.add(code)
    assert len(registry) == 1000


def test_exhausted_attempts_fall_back_to_clock_code():
    first = generate_join_code(lambda c: True)
    second = generate_join_code(lambda c: True)
    for code in (first, second):
        assert len(code) == 6
        assert set(code) <= set(JOIN_CODE_ALPHABET)
    assert first != second


def test_fallback_codes_never_repeat_in_process():
    codes = {fallback_join_code() for _ in range(500)}
    assert len(codes) == 500


def test_generate_handle_suffixes_on_collision():
    taken = {"beach-trip"}
    handle = generate_handle("Beach Trip", lambda h: h in taken)
    assert handle != "beach-trip"
    assert handle.startswith("beach-trip-")
    assert looks_like_handle(handle)


def test_generate_handle_always_terminates():
    first = generate_handle("Beach Trip", lambda h: True)
    second = generate_handle("Beach Trip", lambda h: True)
    assert first.startswith("beach-trip-")
    assert first != second
    assert looks_like_handle(first)


def test_unique_code_skips_legacy_crew_codes(db_session, monkeypatch):
    db_session.add(TripCrew(name="Old Crew", join_code="AAAAAA"))
    db_session.commit()

    draws = iter(["AAAAAA", "BBBBBB"])
    monkeypatch.setattr(invite_codes, "random_join_code", lambda: next(draws))

    assert generate_unique_join_code(db_session) == "BBBBBB"


def test_unique_handle_checks_existing_crews(db_session):
    db_session.add(TripCrew(name="Beach Trip", handle="beach-trip"))
    db_session.commit()

    handle = generate_unique_handle(db_session, "Beach Trip")
    assert handle.startswith("beach-trip-")
