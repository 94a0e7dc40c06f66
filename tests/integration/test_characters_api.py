"""Character API integration tests."""

from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import AsyncClient

from finquest.progression.leveling import xp_required


class TestCreateCharacter:
    @pytest.mark.asyncio
    async def test_starting_values(self, client: AsyncClient):
        """New characters start at level 1 with the fixed starting snapshot."""
        response = await client.post("/api/v1/characters", json={"user_id": 7, "name": "  Goldie  "})
        assert response.status_code == 201
        data = response.json()
        character = data["character"]
        assert character["name"] == "Goldie"
        assert character["level"] == 1
        assert character["xp"] == 0
        assert character["xp_to_next_level"] == 100
        assert character["class_name"] == "Financial Apprentice"
        assert Decimal(character["gold"]) == Decimal("500")
        assert Decimal(character["income"]) == Decimal("2000")
        assert character["credit_score"] == 650
        assert character["wisdom"] == 1
        assert data["financial_health"]["score"] == 22
        assert data["achievement_count"] == 0
        assert data["recent_activity"][0]["action_type"] == "character_created"

    @pytest.mark.asyncio
    async def test_one_character_per_user(self, client: AsyncClient, character: dict):
        """A second character for the same user is a conflict."""
        response = await client.post("/api/v1/characters", json={"user_id": character["user_id"], "name": "Other"})
        assert response.status_code == 409
        assert response.json()["detail"] == "You already have a character"

    @pytest.mark.asyncio
    async def test_name_too_short(self, client: AsyncClient):
        response = await client.post("/api/v1/characters", json={"user_id": 3, "name": "X"})
        assert response.status_code == 422


class TestReadCharacter:
    @pytest.mark.asyncio
    async def test_get_character(self, client: AsyncClient, character: dict):
        response = await client.get(f"/api/v1/characters/{character['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["character"]["id"] == character["id"]
        assert set(data["financial_health"]["breakdown"]) == {
            "emergency_fund",
            "debt_to_income",
            "credit_score",
            "savings_rate",
        }

    @pytest.mark.asyncio
    async def test_missing_character(self, client: AsyncClient):
        response = await client.get("/api/v1/characters/424242")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_rename(self, client: AsyncClient, character: dict):
        response = await client.patch(f"/api/v1/characters/{character['id']}", json={"name": "Penny Pincher"})
        assert response.status_code == 200
        assert response.json()["name"] == "Penny Pincher"


class TestFinances:
    @pytest.mark.asyncio
    async def test_update_snapshot_changes_health(self, client: AsyncClient, character: dict):
        response = await client.put(
            f"/api/v1/characters/{character['id']}/finances",
            json={"emergency_fund": 4500, "savings_rate": 20, "credit_score": 700},
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["character"]["emergency_fund"]) == Decimal("4500")
        assert data["character"]["credit_score"] == 700
        assert data["financial_health"]["score"] > 22
        assert data["recent_activity"][0]["action_type"] == "finances_updated"

    @pytest.mark.asyncio
    async def test_paying_off_debt_unlocks_achievement(self, client: AsyncClient, character: dict):
        """Zero debt unlocks Debt Free; its 200 XP bonus rolls through the curve."""
        response = await client.put(f"/api/v1/characters/{character['id']}/finances", json={"debt": 0})
        assert response.status_code == 200
        data = response.json()
        assert data["achievement_count"] == 1
        assert data["character"]["level"] == 2
        assert data["character"]["xp"] == 200 - xp_required(1)
        assert Decimal(data["character"]["gold"]) == Decimal("600")
        assert Decimal(data["character"]["total_gold_earned"]) == Decimal("100")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"credit_score": 900},
            {"credit_score": 299},
            {"savings_rate": 150},
            {"debt": -5},
            {"income": "1e30"},
            {"debt": 1e40},
            {"investments": "10000000000"},
            {"net_worth": "-10000000000"},
        ],
    )
    async def test_out_of_range_values_rejected(self, client: AsyncClient, character: dict, payload: dict):
        response = await client.put(f"/api/v1/characters/{character['id']}/finances", json=payload)
        assert response.status_code == 400

        unchanged = (await client.get(f"/api/v1/characters/{character['id']}")).json()["character"]
        assert unchanged["credit_score"] == 650
        assert Decimal(unchanged["debt"]) == Decimal("1000")

    @pytest.mark.asyncio
    async def test_amount_at_column_ceiling_accepted(self, client: AsyncClient, character: dict):
        response = await client.put(
            f"/api/v1/characters/{character['id']}/finances", json={"income": "9999999999.99"}
        )
        assert response.status_code == 200
        assert Decimal(response.json()["character"]["income"]) == Decimal("9999999999.99")

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, client: AsyncClient, character: dict):
        response = await client.put(f"/api/v1/characters/{character['id']}/finances", json={"lottery": 1})
        assert response.status_code == 422


class TestStatsAndActivity:
    @pytest.mark.asyncio
    async def test_stats_for_new_character(self, client: AsyncClient, character: dict):
        response = await client.get(f"/api/v1/characters/{character['id']}/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["quest_stats"]["completed"] == 0
        assert data["quest_stats"]["avg_score"] is None
        assert data["achievement_stats"] == []
        assert data["minigame_stats"] == []

    @pytest.mark.asyncio
    async def test_activity_feed_paginates(self, client: AsyncClient, character: dict):
        for score in (10, 20, 30):
            await client.post(
                f"/api/v1/characters/{character['id']}/minigames/score",
                json={"game_type": "budget_balance", "score": score},
            )

        response = await client.get(f"/api/v1/characters/{character['id']}/activity?page=1&per_page=2")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert len(data["entries"]) == 2
        assert data["entries"][0]["action_type"] == "minigame_played"
        assert data["entries"][0]["metadata"]["score"] == 30

        last_page = (await client.get(f"/api/v1/characters/{character['id']}/activity?page=2&per_page=2")).json()
        assert last_page["entries"][-1]["action_type"] == "character_created"


class TestReferenceTables:
    @pytest.mark.asyncio
    async def test_classes(self, client: AsyncClient):
        response = await client.get("/api/v1/classes")
        assert response.status_code == 200
        classes = response.json()["classes"]
        assert classes[0] == {"min_level": 1, "name": "Financial Apprentice"}
        assert classes[-1] == {"min_level": 45, "name": "Financial Grandmaster"}

    @pytest.mark.asyncio
    async def test_levels(self, client: AsyncClient):
        response = await client.get("/api/v1/levels")
        data = response.json()
        assert data["max_level"] == 50
        assert len(data["levels"]) == 50
        assert data["levels"][0]["xp_required"] == 100
