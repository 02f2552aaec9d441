"""HTTP tests for the catalogue listing endpoints."""

from __future__ import annotations

import pytest

from catalog_service.features.tools.models import tools_categories
from tests.factories import at, make_affiliate_link, make_category, make_tag, make_tool

API = "/api/v1"


@pytest.fixture
async def catalogue(db_session):
    """Five tools, one category and an affiliate link."""
    db_session.add_all(
        [
            *(
                make_tool(f"T{i}", f"Tool {i}", slug=f"tool-{i}", created_at=at(i))
                for i in range(5)
            ),
            make_category("CAT", "Testing"),
            make_affiliate_link("T0", is_primary=True),
        ]
    )
    await db_session.flush()
    await db_session.execute(tools_categories.insert(), [{"tool_id": "T1", "category_id": "CAT"}])
    return db_session


class TestToolListing:
    async def test_response_shape_is_camel_case(self, client, catalogue):
        response = await client.get(f"{API}/tools", params={"limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"items", "nextCursor", "hasMore"}
        assert body["hasMore"] is True
        assert body["nextCursor"]
        assert {"id", "slug", "isSponsored", "createdAt", "updatedAt"} <= set(body["items"][0])

    async def test_following_next_cursor_visits_every_tool_once(self, client, catalogue):
        seen: list[str] = []
        params = {"limit": 2, "sortBy": "newest"}

        while True:
            body = (await client.get(f"{API}/tools", params=params)).json()
            seen.extend(item["id"] for item in body["items"])
            if not body["hasMore"]:
                assert body["nextCursor"] is None
                break
            params["cursor"] = body["nextCursor"]

        assert seen == ["T0", "T4", "T3", "T2", "T1"]

    async def test_dead_cursor_restarts_from_first_page(self, client, catalogue):
        first = (await client.get(f"{API}/tools", params={"limit": 2})).json()

        response = await client.get(
            f"{API}/tools", params={"limit": 2, "cursor": "not-a-real-cursor"}
        )

        assert response.status_code == 200
        assert response.json()["items"] == first["items"]

    async def test_cursor_for_another_sort_restarts(self, client, catalogue):
        by_name = (await client.get(f"{API}/tools", params={"limit": 2, "sortBy": "name"})).json()

        response = await client.get(
            f"{API}/tools",
            params={"limit": 2, "sortBy": "newest", "cursor": by_name["nextCursor"]},
        )

        assert [item["id"] for item in response.json()["items"]] == ["T0", "T4"]

    @pytest.mark.parametrize(("limit", "count"), [(0, 1), (-1, 1), (500, 5)])
    async def test_out_of_range_limit_is_clamped(self, client, catalogue, limit, count):
        response = await client.get(f"{API}/tools", params={"limit": limit})

        assert response.status_code == 200
        assert len(response.json()["items"]) == count

    async def test_unknown_sort_key_is_rejected(self, client):
        response = await client.get(f"{API}/tools", params={"sortBy": "trending"})

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == "validation-error"
        assert body["errors"][0]["field"] == "query.sortBy"

    async def test_filters_by_category_ids(self, client, catalogue):
        response = await client.get(f"{API}/tools", params={"categoryIds": ["CAT"]})

        assert [item["id"] for item in response.json()["items"]] == ["T1"]

    async def test_search_endpoint(self, client, catalogue):
        response = await client.get(f"{API}/tools/search", params={"q": "tool 3"})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["items"]] == ["T3"]

    async def test_search_requires_a_query(self, client):
        response = await client.get(f"{API}/tools/search")

        assert response.status_code == 422


class TestToolDetail:
    async def test_detail_includes_relations(self, client, catalogue):
        response = await client.get(f"{API}/tools/tool-1")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "T1"
        assert body["categoryIds"] == ["CAT"]
        assert body["affiliateUrl"] is None
        assert body["isSponsored"] is False

    async def test_detail_affiliate_url(self, client, catalogue):
        body = (await client.get(f"{API}/tools/tool-0")).json()

        assert body["affiliateUrl"] == "https://partners.example.com/T0"

    async def test_missing_tool_is_problem_details(self, client):
        response = await client.get(f"{API}/tools/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["title"] == "Not Found"
        assert body["type"] == "not-found"
        assert body["slug"] == "nope"

    async def test_alternatives_of_missing_tool(self, client):
        response = await client.get(f"{API}/tools/nope/alternatives")

        assert response.status_code == 404


class TestOtherListings:
    async def test_tags(self, client, db_session):
        db_session.add_all([make_tag("B", "beta"), make_tag("A", "alpha")])
        await db_session.flush()

        body = (await client.get(f"{API}/tags")).json()

        assert [tag["name"] for tag in body["items"]] == ["alpha", "beta"]
        assert body["hasMore"] is False

    async def test_categories_and_detail(self, client, catalogue):
        listing = (await client.get(f"{API}/categories")).json()
        detail = await client.get(f"{API}/categories/cat-testing")
        missing = await client.get(f"{API}/categories/nope")

        assert [c["id"] for c in listing["items"]] == ["CAT"]
        assert detail.json()["name"] == "Testing"
        assert missing.status_code == 404

    async def test_affiliate_links(self, client, catalogue):
        body = (await client.get(f"{API}/affiliate-links")).json()

        assert [link["toolId"] for link in body["items"]] == ["T0"]
        assert body["items"][0]["isPrimary"] is True

    async def test_sponsorships_empty(self, client, catalogue):
        response = await client.get(f"{API}/sponsorships", params={"sortBy": "priorityWeight"})

        assert response.json() == {"items": [], "nextCursor": None, "hasMore": False}

    async def test_stacks_reject_bad_sort_order(self, client):
        response = await client.get(f"{API}/stacks", params={"sortOrder": "sideways"})

        assert response.status_code == 422


class TestRequestId:
    async def test_request_id_is_echoed(self, client):
        response = await client.get(f"{API}/tags", headers={"X-Request-ID": "req-123"})

        assert response.headers["x-request-id"] == "req-123"

    async def test_request_id_is_generated(self, client):
        response = await client.get(f"{API}/tags")

        assert len(response.headers["x-request-id"]) == 32
