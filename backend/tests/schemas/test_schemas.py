"""Tests for input schemas — normalization and boundary validation."""

import pytest
from pydantic import ValidationError

from lexicology.core.identifiers import generate_id
from lexicology.schemas.user import UserCreate, UserRecord
from lexicology.schemas.word import WordCreate, WordQuery


def test_user_create_accepts_camel_case_aliases():
    user = UserCreate.model_validate({
        "firstName": "Ann", "lastName": "Lee", "birthDate": "1990-01-01",
        "categories": ["Programming"],
    })
    assert user.first_name == "Ann"
    assert user.birth_date == "1990-01-01"
    assert user.categories == ["Programming"]


def test_user_create_blank_email_becomes_none():
    user = UserCreate(first_name="Ann", last_name="Lee", birth_date="1990-01-01", email="  ")
    assert user.email is None


def test_user_create_rejects_non_iso_birth_date():
    with pytest.raises(ValidationError):
        UserCreate(first_name="Ann", last_name="Lee", birth_date="01/01/1990")


def test_user_create_rejects_blank_names():
    with pytest.raises(ValidationError):
        UserCreate(first_name="   ", last_name="Lee", birth_date="1990-01-01")


def test_user_record_defaults_null_categories_to_empty_list():
    record = UserRecord.model_validate({
        "id": "u1", "first_name": "A", "last_name": "B", "email": None,
        "birth_date": "1990-01-01", "categories": None,
        "created_at": "2026-01-01T00:00:00", "updated_at": "2026-01-01T00:00:00",
    })
    assert record.categories == []


def test_word_create_defaults_source_and_category():
    word = WordCreate(user_id="u1", word="ubiquitous", meaning="everywhere", sentence="It is.")
    assert word.source == "User"
    assert word.category is None


def test_word_create_strips_text_and_blank_category():
    word = WordCreate(
        userId="u1", word="  serendipity ", meaning="luck", sentence="Pure.", category=" ",
    )
    assert word.word == "serendipity"
    assert word.category is None


def test_word_query_rejects_negative_paging_but_not_large_limit():
    assert WordQuery(limit=100_000).limit == 100_000
    with pytest.raises(ValidationError):
        WordQuery(offset=-1)


def test_generated_ids_are_unique_strings():
    ids = {generate_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(isinstance(i, str) and len(i) == 36 for i in ids)
