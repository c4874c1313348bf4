"""Integration Tests: UserRepository — CRUD, membership replacement, cascades, stats.

Invariants:
    - Unknown category names are dropped from membership, kept in the categories list
    - update() replaces membership: [A, B] → [B, C] leaves exactly {B, C}
    - delete() cascades to the user's words and memberships only
    - Duplicate email → ConstraintViolationError (no pre-check in the repository)
    - Stats default to 0 and count recent words over a trailing 7-day window
"""

import pytest
from sqlalchemy import select

from lexicology.core.errors import ConstraintViolationError
from lexicology.models import Category
from lexicology.repositories.user_repository import UserRepository
from lexicology.schemas.user import UserCreate, UserUpdate

_categories = Category.__table__


def _update(categories, **overrides):
    fields = {
        "first_name": "Ann", "last_name": "Lee", "birth_date": "1990-01-01",
        "email": "ann@example.com", "categories": categories,
    }
    fields.update(overrides)
    return UserUpdate(**fields)


async def _membership(users, user_id):
    return {c.name for c in await users.get_user_categories(user_id)}


async def test_create_returns_user_with_generated_id(ann):
    assert len(ann.id) == 36
    assert ann.first_name == "Ann"
    assert ann.categories == ["Programming"]
    assert ann.created_at is not None


async def test_create_links_matching_category(users, ann):
    linked = await users.get_user_categories(ann.id)
    assert [(c.name, c.icon) for c in linked] == [("Programming", "keyboard")]


async def test_create_drops_unknown_category_names(users):
    user = await users.create(UserCreate(
        first_name="Cy", last_name="Ng", birth_date="2001-02-03",
        categories=["Science", "Knitting", "Finance", "Science"],
    ))
    assert user.categories == ["Science", "Knitting", "Finance", "Science"]
    assert await _membership(users, user.id) == {"Science", "Finance"}


async def test_unknown_names_are_not_added_to_catalog(users, executor):
    await users.create(UserCreate(
        first_name="Cy", last_name="Ng", birth_date="2001-02-03", categories=["Knitting"],
    ))
    row = await executor.fetch_one(
        select(_categories).where(_categories.c.name == "Knitting"),
    )
    assert row is None


async def test_create_without_categories_links_nothing(users, bob):
    assert bob.categories == []
    assert await users.get_user_categories(bob.id) == []


async def test_find_by_id_and_email(users, ann):
    assert (await users.find_by_id(ann.id)).email == "ann@example.com"
    assert (await users.find_by_email("ann@example.com")).id == ann.id


async def test_lookups_return_none_when_missing(users):
    assert await users.find_by_id("missing") is None
    assert await users.find_by_email("nobody@example.com") is None


async def test_duplicate_email_raises_constraint_violation(users, ann):
    with pytest.raises(ConstraintViolationError):
        await users.create(UserCreate(
            first_name="Other", last_name="Ann", birth_date="1991-01-01",
            email="ann@example.com",
        ))


async def test_constraint_violation_response_carries_no_driver_text(users, ann):
    with pytest.raises(ConstraintViolationError) as exc_info:
        await users.create(UserCreate(
            first_name="Other", last_name="Ann", birth_date="1991-01-01",
            email="ann@example.com",
        ))
    err = exc_info.value
    assert err.to_response()["error"]["message"] == "Constraint violated during execute"
    assert "users.email" in err.context.debug_info["detail"]


async def test_failed_create_leaves_no_row(users, ann):
    with pytest.raises(ConstraintViolationError):
        await users.create(UserCreate(
            first_name="Dup", last_name="Ann", birth_date="1991-01-01",
            email="ann@example.com", categories=["Science"],
        ))
    assert [u.id for u in await users.list_all()] == [ann.id]


async def test_users_without_email_do_not_collide(users, bob):
    other = await users.create(UserCreate(
        first_name="Dee", last_name="Fox", birth_date="1970-12-31",
    ))
    assert other.email is None and bob.email is None


async def test_update_replaces_membership(users):
    user = await users.create(UserCreate(
        first_name="Ann", last_name="Lee", birth_date="1990-01-01",
        categories=["Science", "History"],
    ))
    updated = await users.update(user.id, _update(["History", "Finance"], email=None))
    assert updated.categories == ["History", "Finance"]
    assert await _membership(users, user.id) == {"History", "Finance"}


async def test_update_overwrites_fields_and_touches_updated_at(users, ann):
    updated = await users.update(
        ann.id, _update([], first_name="Annie", email="annie@example.com"),
    )
    assert updated.first_name == "Annie"
    assert updated.email == "annie@example.com"
    assert updated.categories == []
    assert updated.updated_at >= ann.updated_at
    assert await users.get_user_categories(ann.id) == []


async def test_update_missing_user_returns_none(users):
    assert await users.update("missing", _update(["Science"])) is None
    assert await users.find_by_id("missing") is None


async def test_delete_cascades_to_words_and_memberships(users, words, ann, bob, make_word):
    await make_word(ann.id, "ubiquitous")
    bobs = await make_word(bob.id, "ephemeral")

    assert await users.delete(ann.id) is True

    assert await users.find_by_id(ann.id) is None
    assert await words.get_user_word_count(ann.id) == 0
    assert await users.get_user_categories(ann.id) == []
    assert (await words.find_by_id(bobs.id)).word == "ephemeral"
    assert len(await words.get_categories()) == 15


async def test_delete_missing_user_returns_false(users):
    assert await users.delete("missing") is False


async def test_list_all_newest_first(users, executor):
    first = await users.create(UserCreate(first_name="A", last_name="A", birth_date="2000-01-01"))
    second = await users.create(UserCreate(
        first_name="B", last_name="B", birth_date="2000-01-01", categories=["Slang"],
    ))
    listed = await users.list_all()
    assert [u.id for u in listed] == [second.id, first.id]
    assert listed[0].categories == ["Slang"]


async def test_user_stats_default_to_zero(users, bob):
    stats = await users.get_user_stats(bob.id)
    assert (stats.total_words, stats.unique_categories, stats.recent_words) == (0, 0, 0)


async def test_user_stats_counts(users, ann, bob, make_word, backdate):
    await make_word(ann.id, "one", category="Academic")
    await make_word(ann.id, "two", category="Academic")
    await make_word(ann.id, "three", category="Slang")
    await make_word(ann.id, "four")
    old = await make_word(ann.id, "five", category="History")
    await make_word(bob.id, "other", category="Finance")
    await backdate(old.id, days=8)

    stats = await users.get_user_stats(ann.id)
    assert stats.total_words == 5
    assert stats.unique_categories == 3
    assert stats.recent_words == 4


async def test_recent_window_is_configurable(executor, ann, make_word, backdate):
    word = await make_word(ann.id, "yesterday")
    await backdate(word.id, days=2)
    assert (await UserRepository(executor, recent_words_days=1).get_user_stats(ann.id)).recent_words == 0
    assert (await UserRepository(executor, recent_words_days=3).get_user_stats(ann.id)).recent_words == 1
