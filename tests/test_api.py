"""Tests for the HTTP endpoints, wired to an in-memory database."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from components.core.init_db import get_db


class TestHealthAndAuth:
    async def test_health_check(self, client):
        response = await client.get("/health_check/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_register_login_me(self, client):
        response = await client.post(
            "/auth/register", json={"email": "Ana@Example.com", "password": "secret123"}
        )
        assert response.status_code == 201
        assert response.json()["email"] == "ana@example.com"

        duplicate = await client.post(
            "/auth/register", json={"email": "ana@example.com", "password": "secret123"}
        )
        assert duplicate.status_code == 400

        login = await client.post(
            "/auth/login", data={"username": "ana@example.com", "password": "secret123"}
        )
        assert login.status_code == 200
        token = login.json()["access_token"]

        me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "ana@example.com"

    async def test_bad_password(self, client):
        await client.post("/auth/register", json={"email": "ana@example.com", "password": "secret123"})
        response = await client.post(
            "/auth/login", data={"username": "ana@example.com", "password": "nope"}
        )
        assert response.status_code == 401

    async def test_finance_endpoints_require_token(self, client):
        assert (await client.get("/transactions/")).status_code == 401
        assert (await client.get("/goals/")).status_code == 401
        assert (await client.get("/reports/balance")).status_code == 401


class TestGoalFlow:
    async def test_linked_transaction_lifecycle(self, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Viagem", "target": 1000})).json()
        assert goal["current"] == 0
        assert goal["progress"] == 0

        created = await auth_client.post(
            "/transactions/",
            json={
                "description": "Aporte",
                "category": "Investimento",
                "value": 200,
                "date": "2024-03-10",
                "goal_id": goal["id"],
            },
        )
        assert created.status_code == 201
        tx = created.json()

        await auth_client.patch(f"/transactions/{tx['id']}", json={"value": 350})
        current = (await auth_client.get(f"/goals/{goal['id']}")).json()
        assert current["current"] == 350
        assert current["progress"] == 35

        deleted = await auth_client.delete(f"/transactions/{tx['id']}")
        assert deleted.status_code == 204
        assert (await auth_client.get(f"/goals/{goal['id']}")).json()["current"] == 0

    async def test_delete_goal_unlinks(self, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Viagem", "target": 1000})).json()
        tx = (
            await auth_client.post(
                "/transactions/",
                json={"description": "Aporte", "value": 100, "date": "2024-03-10", "goal_id": goal["id"]},
            )
        ).json()

        assert (await auth_client.delete(f"/goals/{goal['id']}")).status_code == 204
        assert (await auth_client.get(f"/goals/{goal['id']}")).status_code == 404
        assert (await auth_client.get(f"/transactions/{tx['id']}")).json()["goal_id"] is None

    async def test_deposit(self, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Viagem", "target": 1000})).json()

        response = await auth_client.post(
            f"/goals/{goal['id']}/deposits", json={"amount": 250, "date": "2024-03-15"}
        )
        assert response.status_code == 201
        tx = response.json()
        assert tx["description"] == "Depósito: Viagem"
        assert tx["category"] == "Investimento"
        assert tx["value"] == 250
        assert tx["goal_id"] == goal["id"]

        refreshed = (await auth_client.get(f"/goals/{goal['id']}")).json()
        assert refreshed["current"] == 250
        assert refreshed["progress"] == 25

    async def test_deposit_errors(self, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Viagem", "target": 1000})).json()
        assert (
            await auth_client.post(f"/goals/{goal['id']}/deposits", json={"amount": 0})
        ).status_code == 422
        assert (await auth_client.post("/goals/99/deposits", json={"amount": 10})).status_code == 404

    async def test_summary(self, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Reserva", "target": 400})).json()
        await auth_client.post(
            "/transactions/",
            json={"description": "Aporte", "value": 100, "date": "2024-03-10", "goal_id": goal["id"]},
        )
        summary = (await auth_client.get("/goals/summary")).json()
        assert summary == {
            "goals_count": 1,
            "completed_count": 0,
            "total_saved": 100,
            "total_target": 400,
            "total_progress": 25,
        }


class TestErrors:
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Viagem", "target": 0},
            {"name": "", "target": 100},
        ],
    )
    async def test_invalid_goal(self, auth_client, payload):
        response = await auth_client.post("/goals/", json=payload)
        assert response.status_code == 422

    async def test_empty_description(self, auth_client):
        response = await auth_client.post(
            "/transactions/", json={"description": "  ", "value": 10, "date": "2024-03-10"}
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Description cannot be empty"

    async def test_unknown_ids(self, auth_client):
        assert (await auth_client.get("/transactions/99")).status_code == 404
        assert (await auth_client.patch("/transactions/99", json={"value": 1})).status_code == 404
        assert (await auth_client.delete("/transactions/99")).status_code == 404
        linked = await auth_client.post(
            "/transactions/", json={"description": "x", "value": 1, "goal_id": 99}
        )
        assert linked.status_code == 404
        assert linked.json()["detail"] == "Goal 99 not found"

    @pytest.mark.parametrize("amount", [1e30, 1e11])
    async def test_amount_out_of_range(self, auth_client, amount):
        goal = await auth_client.post("/goals/", json={"name": "Viagem", "target": amount})
        assert goal.status_code == 422
        assert goal.json()["detail"] == "target is out of range"

        tx = await auth_client.post(
            "/transactions/", json={"description": "Aporte", "value": amount, "date": "2024-03-10"}
        )
        assert tx.status_code == 422
        assert tx.json()["detail"] == "value is out of range"

    async def test_database_failure(self, app, db_manager, auth_client):
        goal = (await auth_client.post("/goals/", json={"name": "Viagem", "target": 1000})).json()
        working_get_db = app.dependency_overrides[get_db]

        async def failing_get_db():
            async with db_manager.get_db() as session:
                async def commit():
                    raise SQLAlchemyError("db down")

                session.commit = commit
                yield session

        app.dependency_overrides[get_db] = failing_get_db
        response = await auth_client.post(
            "/transactions/",
            json={"description": "Aporte", "value": 100, "date": "2024-03-10", "goal_id": goal["id"]},
        )
        assert response.status_code == 502
        assert response.json()["detail"] == "Database operation failed"

        app.dependency_overrides[get_db] = working_get_db
        assert (await auth_client.get(f"/goals/{goal['id']}")).json()["current"] == 0
        assert (await auth_client.get("/transactions/")).json() == []


class TestReports:
    async def test_reports(self, auth_client):
        for payload in (
            {"description": "Salário", "category": "Receita", "value": 8500, "date": "2024-01-05"},
            {"description": "Mercado", "category": "Alimentação", "value": -245.8, "date": "2024-01-10"},
            {"description": "Uber", "category": "Transporte", "value": -32.5, "date": "2024-01-11"},
        ):
            assert (await auth_client.post("/transactions/", json=payload)).status_code == 201

        monthly = (await auth_client.get("/reports/monthly", params={"year": 2024})).json()
        assert len(monthly["months"]) == 12
        assert monthly["months"][0]["income"] == 8500
        assert monthly["months"][0]["expenses"] == pytest.approx(278.3)

        categories = (
            await auth_client.get("/reports/categories", params={"year": 2024, "month": 1})
        ).json()
        assert [c["category"] for c in categories["categories"]] == ["Alimentação", "Transporte"]

        result = (await auth_client.get("/reports/balance", params={"year": 2024, "month": 1})).json()
        assert result["total_balance"] == pytest.approx(8221.7)
        assert result["month_balance"] == pytest.approx(8221.7)

        listed = (
            await auth_client.get("/transactions/", params={"year": 2024, "month": 1, "search": "UBER"})
        ).json()
        assert [tx["description"] for tx in listed] == ["Uber"]
