"""Integration tests for GET /search and GET /search/suggestions.

SQLite has no full text search, so these exercise the substring fallback.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.mark.asyncio
async def test_search_falls_back_to_substring_matching(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await client.get("/search", params={"q": "language"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == "language"
    assert [item["name"] for item in body["grants"]] == ["Language Revitalization Fund"]
    assert body["grants"][0]["grantType"] == "foundation"
    assert body["scholarships"] == []
    assert body["resources"] == []


@pytest.mark.asyncio
async def test_search_matches_description_and_skips_deleted(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    body = (await client.get("/search", params={"q": "winter heating"})).json()

    assert [item["name"] for item in body["resources"]] == ["Emergency Heating Assistance"]

    withdrawn = (await client.get("/search", params={"q": "youth programs"})).json()
    assert withdrawn["grants"] == []


@pytest.mark.asyncio
async def test_search_matches_tags_case_insensitively(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    body = (await client.get("/search", params={"q": "CHEROKEE"})).json()

    assert [item["name"] for item in body["scholarships"]] == [
        "Cherokee Nation Undergraduate Award"
    ]


@pytest.mark.asyncio
async def test_blank_search(client: AsyncClient) -> None:
    resp = await client.get("/search", params={"q": "   "})

    assert resp.status_code == 200
    assert resp.json() == {"query": "", "grants": [], "scholarships": [], "resources": []}


@pytest.mark.asyncio
async def test_suggestions(client: AsyncClient, seeded_db: AsyncSession) -> None:
    resp = await client.get("/search/suggestions", params={"q": "tribal"})

    assert resp.status_code == 200
    assert resp.json() == {
        "suggestions": [
            {"type": "resource", "text": "Tribal Enrollment Office Hours"},
            {"type": "tag", "text": "tribal enrollment"},
        ]
    }


@pytest.mark.asyncio
async def test_short_query_has_no_suggestions(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await client.get("/search/suggestions", params={"q": "t"})

    assert resp.json() == {"suggestions": []}
