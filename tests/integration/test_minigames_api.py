"""Mini-game API integration tests."""

from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import AsyncClient


def score_url(character_id: int) -> str:
    return f"/api/v1/characters/{character_id}/minigames/score"


class TestSubmitScore:
    @pytest.mark.asyncio
    async def test_baseline_score(self, client: AsyncClient, character: dict):
        response = await client.post(
            score_url(character["id"]),
            json={"game_type": "budget_balance", "score": 50, "data": {"rounds": 3}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["xp_earned"] == 30
        assert Decimal(data["gold_earned"]) == Decimal("15")
        assert data["play"]["data"] == {"rounds": 3}
        assert data["level_up"] is None
        assert data["character"]["xp"] == 30
        assert Decimal(data["character"]["total_gold_earned"]) == Decimal("15")

    @pytest.mark.asyncio
    async def test_high_score_levels_up(self, client: AsyncClient, character: dict):
        response = await client.post(score_url(character["id"]), json={"game_type": "investment_sim", "score": 100})
        data = response.json()
        assert data["xp_earned"] == 100
        assert data["character"]["level"] == 2
        assert data["level_up"]["new_level"] == 2

    @pytest.mark.asyncio
    async def test_unknown_game_type_rejected_without_a_row(self, client: AsyncClient, character: dict):
        response = await client.post(score_url(character["id"]), json={"game_type": "poker", "score": 80})
        assert response.status_code == 400
        assert "Unknown game type" in response.json()["detail"]

        history = (await client.get(f"/api/v1/characters/{character['id']}/minigames/history")).json()
        assert history["plays"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", [-1, 101])
    async def test_out_of_range_score_rejected(self, client: AsyncClient, character: dict, score: int):
        response = await client.post(score_url(character["id"]), json={"game_type": "debt_payoff", "score": score})
        assert response.status_code == 400

        hero = (await client.get(f"/api/v1/characters/{character['id']}")).json()["character"]
        assert hero["xp"] == 0

    @pytest.mark.asyncio
    async def test_missing_character(self, client: AsyncClient):
        response = await client.post(score_url(31337), json={"game_type": "debt_payoff", "score": 50})
        assert response.status_code == 404


class TestHistoryAndBest:
    @pytest.mark.asyncio
    async def test_history_newest_first(self, client: AsyncClient, character: dict):
        for score in (10, 90, 40):
            await client.post(score_url(character["id"]), json={"game_type": "budget_balance", "score": score})

        response = await client.get(f"/api/v1/characters/{character['id']}/minigames/history")
        assert response.status_code == 200
        assert [p["score"] for p in response.json()["plays"]] == [40, 90, 10]

    @pytest.mark.asyncio
    async def test_history_limit(self, client: AsyncClient, character: dict):
        for score in (10, 20, 30):
            await client.post(score_url(character["id"]), json={"game_type": "budget_balance", "score": score})

        response = await client.get(f"/api/v1/characters/{character['id']}/minigames/history?limit=2")
        assert len(response.json()["plays"]) == 2

    @pytest.mark.asyncio
    async def test_best_scores_per_game(self, client: AsyncClient, character: dict):
        plays = [("budget_balance", 40), ("budget_balance", 80), ("compound_interest", 65)]
        for game_type, score in plays:
            await client.post(score_url(character["id"]), json={"game_type": game_type, "score": score})

        response = await client.get(f"/api/v1/characters/{character['id']}/minigames/best")
        assert response.status_code == 200
        assert response.json()["best_scores"] == [
            {"game_type": "budget_balance", "best_score": 80, "times_played": 2},
            {"game_type": "compound_interest", "best_score": 65, "times_played": 1},
        ]

        stats = (await client.get(f"/api/v1/characters/{character['id']}/stats")).json()
        assert stats["minigame_stats"][0] == {
            "game_type": "budget_balance",
            "plays": 2,
            "best_score": 80,
            "avg_score": 60.0,
        }
