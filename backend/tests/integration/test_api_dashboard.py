"""
Integration tests for dashboard endpoints and the health check.
"""

import pytest

SETTINGS_BODY = {
    "startDate": "2023-02-14",
    "reminderDays": [0, 1],
    "partner1": {"name": "Minh", "dob": "1998-06-13"},
    "partner2": {"name": "Lan", "dob": "1999-11-02"},
}


class TestDashboardEndpoints:
    """Tests for /dashboard."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_counter(self, client):
        await client.put("/settings", json=SETTINGS_BODY)

        response = await client.get("/dashboard/counter")

        assert response.status_code == 200
        data = response.json()
        assert data["totalDays"] == 485
        assert data["years"] == 1
        assert data["months"] == 4
        assert (data["hours"], data["minutes"]) == (15, 30)

    @pytest.mark.integration
    @pytest.mark.api
    async def test_counter_with_defaults(self, client):
        """Nothing saved: the start date is today, which is day 1."""
        data = (await client.get("/dashboard/counter")).json()

        assert data["totalDays"] == 1
        assert data["days"] == 1

    @pytest.mark.integration
    @pytest.mark.api
    async def test_milestone(self, client):
        await client.put("/settings", json=SETTINGS_BODY)

        data = (await client.get("/dashboard/milestone")).json()

        assert data == {"daysLeft": 246, "label": "Milestone 730 days", "targetDate": "2025-02-13"}

    @pytest.mark.integration
    @pytest.mark.api
    async def test_reminders(self, client, dispatcher):
        await client.put("/settings", json=SETTINGS_BODY)
        await client.post(
            "/plans",
            json={
                "title": "Dinner",
                "targetDate": "2024-06-12",
                "reminderEnabled": True,
                "reminderTime": "2024-06-12T12:00",
            },
        )

        response = await client.get("/dashboard/reminders")

        titles = [entry["title"] for entry in response.json()]
        assert titles == ["Dinner (0 days left)", "Time for: Dinner", "Minh's Birthday (1 days left)"]
        assert dispatcher.titles == ["Time for: Dinner"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_overview(self, client):
        await client.put("/settings", json=SETTINGS_BODY)
        await client.post("/plans", json={"id": "p1", "title": "Trip", "targetDate": "2024-07-01", "isPinned": True})

        data = (await client.get("/dashboard")).json()

        assert data["counter"]["totalDays"] == 485
        assert data["milestone"]["label"] == "Milestone 730 days"
        assert [partner["zodiac"] for partner in data["partners"]] == ["Gemini", "Scorpio"]
        assert [plan["id"] for plan in data["pinnedPlans"]] == ["p1"]
        assert [entry["kind"] for entry in data["reminders"]] == ["event"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_reminders_follow_plan_deletion(self, client):
        await client.put("/settings", json=SETTINGS_BODY)
        await client.post("/plans", json={"id": "p1", "title": "Trip", "targetDate": "2024-06-13"})
        before = [entry["title"] for entry in (await client.get("/dashboard/reminders")).json()]

        await client.delete("/plans/p1")
        after = [entry["title"] for entry in (await client.get("/dashboard/reminders")).json()]

        assert "Trip (1 days left)" in before
        assert after == ["Minh's Birthday (1 days left)"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_reminders_after_reset(self, client):
        """A reset empties the feed apart from what the default settings produce."""
        await client.put("/settings", json=SETTINGS_BODY)
        await client.post("/plans", json={"id": "p1", "title": "Trip", "targetDate": "2024-06-13"})
        await client.get("/dashboard/reminders")

        await client.post("/backup/reset")
        titles = [entry["title"] for entry in (await client.get("/dashboard/reminders")).json()]
        overview = (await client.get("/dashboard")).json()

        assert titles == ["Our Anniversary (0 days left)"]
        assert [entry["title"] for entry in overview["reminders"]] == titles
        assert overview["pinnedPlans"] == []


class TestHealthAndErrors:
    """Tests for the health check and storage failure mapping."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.json() == {"status": "ok", "storage": "open", "restoring": False}

    @pytest.mark.integration
    @pytest.mark.api
    async def test_storage_unavailable_is_503(self, client, store):
        await store.close()

        response = await client.get("/plans")

        assert response.status_code == 503
        assert "Storage unavailable" in response.json()["detail"]
        assert (await client.get("/health")).json()["status"] == "degraded"
