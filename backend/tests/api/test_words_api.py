"""Word Routes — CRUD, listings, global search and overview stats.

Invariants:
    - Creating a word for an unknown user → 404, nothing written
    - GET /words without user_id spans all users
    - Global search requires a term of at least 2 non-blank characters
"""

import pytest


@pytest.fixture
async def owner(signed_up):
    return await signed_up(email="ann@example.com")


async def _post_word(client, user_id, word, meaning="a meaning", category=None):
    return await client.post("/api/v1/words", json={
        "userId": user_id, "word": word, "meaning": meaning,
        "sentence": "A sentence.", "category": category,
    })


async def test_create_word(client, owner):
    res = await _post_word(client, owner["id"], "  ubiquitous ", category="Academic")
    assert res.status_code == 201
    word = res.json()["word"]
    assert word["word"] == "ubiquitous"
    assert word["source"] == "User"
    assert word["email"] == "ann@example.com"


async def test_create_word_for_unknown_user_is_404(client):
    res = await _post_word(client, "no-such-user", "boo")
    assert res.status_code == 404
    assert (await client.get("/api/v1/words")).json()["words"] == []


async def test_create_word_with_blank_meaning_is_400(client, owner):
    res = await _post_word(client, owner["id"], "empty", meaning="   ")
    assert res.status_code == 400


async def test_get_update_delete_word(client, owner):
    word_id = (await _post_word(client, owner["id"], "teh")).json()["word"]["id"]

    res = await client.put(f"/api/v1/words/{word_id}", json={
        "word": "the", "meaning": "definite article", "sentence": "The end.",
    })
    assert res.status_code == 200
    assert res.json()["word"]["word"] == "the"

    fetched = (await client.get(f"/api/v1/words/{word_id}")).json()
    assert fetched["meaning"] == "definite article"
    assert fetched["user_id"] == owner["id"]

    assert (await client.delete(f"/api/v1/words/{word_id}")).status_code == 204
    assert (await client.get(f"/api/v1/words/{word_id}")).status_code == 404
    assert (await client.delete(f"/api/v1/words/{word_id}")).status_code == 404


async def test_update_missing_word_is_404(client):
    res = await client.put("/api/v1/words/nope", json={
        "word": "a", "meaning": "b", "sentence": "c",
    })
    assert res.status_code == 404


async def test_list_words_for_user_and_globally(client, owner, signed_up):
    other = await signed_up(first_name="Bob")
    await _post_word(client, owner["id"], "mine")
    await _post_word(client, other["id"], "theirs")

    scoped = (await client.get("/api/v1/words", params={"user_id": owner["id"]})).json()
    assert [w["word"] for w in scoped["words"]] == ["mine"]
    assert scoped["pagination"]["total"] == 1

    everyone = (await client.get("/api/v1/words")).json()
    assert {w["word"] for w in everyone["words"]} == {"mine", "theirs"}


async def test_global_search(client, owner, signed_up):
    other = await signed_up(first_name="Bob")
    await _post_word(client, owner["id"], "Lexicon")
    await _post_word(client, other["id"], "glossary", meaning="lexical list")
    await _post_word(client, other["id"], "index")

    res = await client.get("/api/v1/words/search/global", params={"q": " lex "})
    assert res.status_code == 200
    found = {w["word"]: w["first_name"] for w in res.json()}
    assert found == {"Lexicon": "Ann", "glossary": "Bob"}


@pytest.mark.parametrize("term", ["", "a", "  b  "])
async def test_global_search_rejects_short_terms(client, term):
    res = await client.get("/api/v1/words/search/global", params={"q": term})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_stats_overview(client, owner):
    await _post_word(client, owner["id"], "a", category="Slang")
    await _post_word(client, owner["id"], "b", category="Slang")
    await _post_word(client, owner["id"], "c", category="Medical")
    body = (await client.get("/api/v1/words/stats/overview")).json()
    assert body["total_words"] == 3
    assert body["total_users"] == 1
    assert body["recent_activity"] == 3
    assert body["popular_categories"] == [
        {"category": "Slang", "count": 2}, {"category": "Medical", "count": 1},
    ]


async def test_category_list_counts_words(client, owner):
    await _post_word(client, owner["id"], "a", category="Finance")
    body = (await client.get("/api/v1/words/categories/list")).json()
    by_name = {c["name"]: c["word_count"] for c in body}
    assert by_name["Finance"] == 1
    assert by_name["Cooking"] == 0
