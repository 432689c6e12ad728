"""Integration tests for the /grants, /scholarships and /resources endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.dependencies import get_store
from resource_hub.main import app
from resource_hub.models import Grant
from tests.fakes import FakeListingStore


def _names(body: dict) -> list[str]:
    return [item["name"] for item in body["items"]]


@pytest.mark.asyncio
async def test_list_grants_upcoming_first_then_rolling(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    resp = await client.get("/grants")
    assert resp.status_code == 200
    body = resp.json()

    assert _names(body) == [
        "Housing Improvement Program",
        "Language Revitalization Fund",
        "Tribal College Capacity",
        "Small Business Microloans",
        "Clean Water Infrastructure",
    ]
    assert body["totalCount"] == 5
    assert body["totalPages"] == 1
    assert body["page"] == 1
    assert body["pageSize"] == 20


@pytest.mark.asyncio
async def test_list_grants_serializes_camel_case(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    item = (await client.get("/grants")).json()["items"][0]

    assert item["grantType"] == "federal"
    assert item["amountMin"] == 50_000
    assert item["amountMax"] == 250_000
    assert item["fundingAgency"] == "Bureau of Indian Affairs"
    assert item["matchingRequired"] is False
    assert item["tags"] == ["housing"]
    assert "createdAt" in item
    assert "deletedAt" not in item


@pytest.mark.asyncio
async def test_list_grants_hides_expired_and_deleted(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    names = _names((await client.get("/grants")).json())

    assert "Expired Elder Services Grant" not in names
    assert "Withdrawn Youth Programs Grant" not in names


@pytest.mark.asyncio
async def test_malformed_params_fall_back_to_defaults(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    default = (await client.get("/grants")).json()
    resp = await client.get(
        "/grants",
        params={
            "page": "abc",
            "sort": "bogus",
            "type": "nope",
            "amount": "lots",
            "deadline": "whenever",
        },
    )

    assert resp.status_code == 200
    assert resp.json() == default


@pytest.mark.asyncio
@pytest.mark.parametrize("deadline", ["next-\u00b2", "next-99999999", "next-" + "9" * 40])
async def test_unusable_deadline_windows_list_upcoming_items(
    client: AsyncClient, seeded_db: AsyncSession, deadline: str
) -> None:
    default = (await client.get("/grants")).json()
    resp = await client.get("/grants", params={"deadline": deadline})

    assert resp.status_code == 200
    assert resp.json() == default


@pytest.mark.asyncio
async def test_filter_by_tags_matches_any(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/grants", params={"tags": "education,water resources"})).json()

    assert _names(body) == [
        "Language Revitalization Fund",
        "Tribal College Capacity",
        "Clean Water Infrastructure",
    ]


@pytest.mark.asyncio
async def test_filter_by_type(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/grants", params={"type": "state"})).json()

    assert _names(body) == ["Clean Water Infrastructure"]
    assert body["totalCount"] == 1


@pytest.mark.asyncio
async def test_rolling_only(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/grants", params={"deadline": "rolling"})).json()

    assert _names(body) == ["Small Business Microloans", "Clean Water Infrastructure"]
    assert all(item["deadline"] is None for item in body["items"])


@pytest.mark.asyncio
async def test_next_days_window(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/grants", params={"deadline": "next-7"})).json()

    assert _names(body) == [
        "Housing Improvement Program",
        "Small Business Microloans",
        "Clean Water Infrastructure",
    ]


@pytest.mark.asyncio
async def test_amount_filter_keeps_unfiltered_totals(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    body = (await client.get("/grants", params={"amount": "0-50000"})).json()

    assert _names(body) == ["Housing Improvement Program", "Small Business Microloans"]
    assert body["totalCount"] == 5


@pytest.mark.asyncio
async def test_sort_by_amount_puts_unknown_amounts_last(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    body = (await client.get("/grants", params={"sort": "amount-desc"})).json()

    assert _names(body) == [
        "Tribal College Capacity",
        "Housing Improvement Program",
        "Language Revitalization Fund",
        "Clean Water Infrastructure",
        "Small Business Microloans",
    ]


@pytest.mark.asyncio
async def test_pages_straddle_partitions(
    client: AsyncClient, many_grants_db: AsyncSession
) -> None:
    pages = [(await client.get("/grants", params={"page": n})).json() for n in (1, 2, 3, 4)]

    first, second, third, beyond = pages
    assert _names(first) == [f"Upcoming {n:02d}" for n in range(1, 16)] + [
        f"Rolling {n:02d}" for n in range(30, 25, -1)
    ]
    assert _names(second) == [f"Rolling {n:02d}" for n in range(25, 5, -1)]
    assert _names(third) == [f"Rolling {n:02d}" for n in range(5, 0, -1)]
    assert beyond["items"] == []
    assert {page["totalCount"] for page in pages} == {45}
    assert {page["totalPages"] for page in pages} == {3}


@pytest.mark.asyncio
async def test_empty_listing(client: AsyncClient) -> None:
    body = (await client.get("/scholarships")).json()

    assert body["items"] == []
    assert body["totalCount"] == 0
    assert body["totalPages"] == 0


@pytest.mark.asyncio
async def test_list_scholarships(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/scholarships")).json()

    assert _names(body) == [
        "Graduate Health Fellowship",
        "Native STEM Scholars",
        "Cherokee Nation Undergraduate Award",
    ]
    assert body["items"][0]["category"] == "health"
    assert body["items"][0]["eligibility"] == ["enrolled tribal member"]


@pytest.mark.asyncio
async def test_list_resources_newest_first(client: AsyncClient, seeded_db: AsyncSession) -> None:
    body = (await client.get("/resources")).json()

    assert _names(body) == [
        "Tribal Enrollment Office Hours",
        "Emergency Heating Assistance",
        "Indian Health Service Clinics",
    ]

    emergency = (await client.get("/resources", params={"type": "emergency"})).json()
    assert _names(emergency) == ["Emergency Heating Assistance"]


@pytest.mark.asyncio
async def test_read_grant(client: AsyncClient, seeded_db: AsyncSession) -> None:
    grant = (
        await seeded_db.execute(select(Grant).where(Grant.name == "Tribal College Capacity"))
    ).scalar_one()

    resp = await client.get(f"/grants/{grant.id}")

    assert resp.status_code == 200
    assert resp.json()["amount"] == "$1M - $2M"


@pytest.mark.asyncio
async def test_read_deleted_grant_returns_404(
    client: AsyncClient, seeded_db: AsyncSession
) -> None:
    grant = (
        await seeded_db.execute(select(Grant).where(Grant.deleted_at.is_not(None)))
    ).scalar_one()

    resp = await client.get(f"/grants/{grant.id}")

    assert resp.status_code == 404
    assert resp.json() == {
        "error": {"code": "not_found", "message": f"Grant with id {grant.id} not found"}
    }


@pytest.mark.asyncio
async def test_read_missing_resource_returns_404(client: AsyncClient) -> None:
    resp = await client.get("/resources/999")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
@pytest.mark.parametrize("grant_id", ["0", "2147483648", "99999999999999999999"])
async def test_read_grant_with_out_of_range_id_returns_404(
    client: AsyncClient, grant_id: str
) -> None:
    resp = await client.get(f"/grants/{grant_id}")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
async def test_store_failure_returns_retryable_503(client: AsyncClient) -> None:
    app.dependency_overrides[get_store] = lambda: FakeListingStore(fail={"count"})

    resp = await client.get("/grants")

    assert resp.status_code == 503
    assert resp.headers["Retry-After"] == "1"
    assert resp.json() == {
        "error": {
            "code": "query_failed",
            "message": "Unable to load grant listings (count failed)",
        }
    }


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
