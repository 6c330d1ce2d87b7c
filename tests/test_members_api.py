"""회원 API 테스트.

Member API tests — Creation, lookup, search query parameters,
paging strategies over HTTP, statistics and bulk endpoints.
"""

import pytest
from httpx import AsyncClient

URL = "/api/v1/members"


class TestMemberCreate:
    """회원 생성 테스트."""

    async def test_create_member_with_team(self, client: AsyncClient):
        team = (await client.post("/api/v1/teams", json={"name": "teamA"})).json()

        res = await client.post(URL, json={
            "username": "member1",
            "age": 10,
            "team_id": team["id"],
        })
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "member1"
        assert data["team_id"] == team["id"]
        assert data["team_name"] == "teamA"

    async def test_create_member_without_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "loner"})
        assert res.status_code == 201
        data = res.json()
        assert data["age"] == 0
        assert data["team_id"] is None
        assert data["team_name"] is None

    async def test_create_member_without_username(self, client: AsyncClient):
        res = await client.post(URL, json={"age": 30})
        assert res.status_code == 201
        assert res.json()["username"] is None

    async def test_create_member_unknown_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "team_id": 999})
        assert res.status_code == 404

    async def test_create_member_negative_age(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "age": -1})
        assert res.status_code == 422


class TestMemberRead:
    """회원 조회 테스트."""

    async def test_get_member(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/3")
        assert res.status_code == 200
        data = res.json()
        assert data["username"] == "member3"
        assert data["team_name"] == "teamB"

    async def test_get_created_member_resolves_team(self, client: AsyncClient, teams):
        team_id = (await client.get("/api/v1/teams")).json()[0]["id"]
        created = (await client.post(URL, json={"username": "new", "team_id": team_id})).json()

        res = await client.get(f"{URL}/{created['id']}")
        assert res.status_code == 200
        assert res.json()["team_name"] == "teamA"

    async def test_get_nonexistent_member(self, client: AsyncClient):
        res = await client.get(f"{URL}/999")
        assert res.status_code == 404


class TestMemberSearch:
    """회원 검색 테스트."""

    async def test_search_without_filters(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/search")
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 4
        assert set(data[0]) == {"member_id", "username", "age", "team_id", "team_name"}

    async def test_search_by_age_range(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/search", params={"age_goe": 20, "age_loe": 30})
        assert res.status_code == 200
        assert [m["username"] for m in res.json()] == ["member2", "member3"]

    async def test_search_by_team_name(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/search", params={"team_name": "teamB"})
        assert [m["username"] for m in res.json()] == ["member3", "member4"]

    async def test_search_negative_age_rejected(self, client: AsyncClient):
        res = await client.get(f"{URL}/search", params={"age_goe": -5})
        assert res.status_code == 422


class TestMemberSearchPage:
    """회원 검색 페이지네이션 테스트."""

    @pytest.mark.parametrize("strategy", ["simple", "complex", "lazy", "optimized"])
    async def test_strategies_return_same_page(self, client: AsyncClient, teams, strategy):
        res = await client.get(f"{URL}/search/page", params={
            "age_goe": 20,
            "page": 1,
            "size": 2,
            "strategy": strategy,
        })
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member2", "member3"]
        assert data["total"] == 3
        assert data["page"] == 1
        assert data["size"] == 2
        assert data["total_pages"] == 2
        assert data["has_next"] is True

    async def test_default_strategy_and_size(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/search/page")
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 4
        assert data["size"] == 20
        assert data["offset"] == 0

    async def test_last_page(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/search/page", params={"page": 2, "size": 3})
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member4"]
        assert data["total"] == 4
        assert data["has_next"] is False

    async def test_unknown_strategy(self, client: AsyncClient):
        res = await client.get(f"{URL}/search/page", params={"strategy": "bogus"})
        assert res.status_code == 422

    async def test_page_must_be_positive(self, client: AsyncClient):
        res = await client.get(f"{URL}/search/page", params={"page": 0})
        assert res.status_code == 422

    async def test_size_upper_bound(self, client: AsyncClient):
        res = await client.get(f"{URL}/search/page", params={"size": 1000})
        assert res.status_code == 422


class TestMemberAggregates:
    """집계 및 벌크 엔드포인트 테스트."""

    async def test_statistics(self, client: AsyncClient, teams):
        res = await client.get(f"{URL}/statistics")
        assert res.status_code == 200
        assert res.json() == {"count": 4, "sum": 100, "avg": 25.0, "max": 40, "min": 10}

    async def test_bulk_add_age(self, client: AsyncClient, teams):
        res = await client.post(f"{URL}/bulk/add-age", params={"amount": 2})
        assert res.status_code == 200
        assert res.json()["affected"] == 4

        stats = (await client.get(f"{URL}/statistics")).json()
        assert stats["min"] == 12
        assert stats["max"] == 42

    async def test_bulk_delete_older_than(self, client: AsyncClient, teams):
        res = await client.delete(f"{URL}/bulk/older-than/25")
        assert res.status_code == 200
        assert res.json()["affected"] == 2

        remaining = (await client.get(f"{URL}/search")).json()
        assert [m["username"] for m in remaining] == ["member1", "member2"]
