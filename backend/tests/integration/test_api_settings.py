"""
Integration tests for settings and PIN endpoints.
"""

import pytest

SETTINGS_BODY = {
    "startDate": "2023-02-14",
    "countFromDayOne": True,
    "reminderDays": [0, 1, 3],
    "partner1": {"name": "Minh", "dob": "1998-06-13"},
    "partner2": {"name": "Lan", "dob": "1999-11-02"},
}


class TestSettingsEndpoints:
    """Tests for /settings."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_defaults_before_save(self, client):
        response = await client.get("/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["isDefault"] is True
        assert data["settings"]["startDate"] == "2024-06-12T15:30:00"
        assert data["settings"]["reminderDays"] == [0, 1]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_update_and_read_back(self, client):
        response = await client.put("/settings", json=SETTINGS_BODY)

        assert response.status_code == 200
        assert response.json()["partner1"]["name"] == "Minh"

        data = (await client.get("/settings")).json()
        assert data["isDefault"] is False
        assert data["settings"]["partner2"]["dob"] == "1999-11-02"
        assert data["settings"]["reminderDays"] == [0, 1, 3]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_invalid_settings_rejected(self, client):
        response = await client.put("/settings", json={**SETTINGS_BODY, "reminderDays": [-2]})

        assert response.status_code == 422

    @pytest.mark.integration
    @pytest.mark.api
    async def test_put_cannot_change_pin(self, client):
        await client.post("/settings/pin", json={"pin": "1234", "confirmPin": "1234"})

        response = await client.put("/settings", json={**SETTINGS_BODY, "securityPin": "9999"})

        assert response.json()["securityPin"] == "1234"


class TestPinEndpoints:
    """Tests for /settings/pin."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_enable_verify_disable(self, client):
        response = await client.post("/settings/pin", json={"pin": "1234", "confirmPin": "1234"})
        assert response.status_code == 200
        assert response.json() == {"enabled": True}

        assert (await client.post("/settings/pin/verify", json={"pin": "1234"})).json() == {"valid": True}
        assert (await client.post("/settings/pin/verify", json={"pin": "0000"})).json() == {"valid": False}

        response = await client.request("DELETE", "/settings/pin", json={"pin": "1234"})
        assert response.status_code == 200
        assert response.json() == {"enabled": False}

    @pytest.mark.integration
    @pytest.mark.api
    async def test_verify_without_pin(self, client):
        response = await client.post("/settings/pin/verify", json={"pin": "0000"})

        assert response.json() == {"valid": True}

    @pytest.mark.integration
    @pytest.mark.api
    async def test_confirmation_mismatch(self, client):
        response = await client.post("/settings/pin", json={"pin": "1234", "confirmPin": "4321"})

        assert response.status_code == 403
        assert "does not match" in response.json()["detail"]

    @pytest.mark.integration
    @pytest.mark.api
    async def test_malformed_pin(self, client):
        response = await client.post("/settings/pin", json={"pin": "12", "confirmPin": "12"})

        assert response.status_code == 400

    @pytest.mark.integration
    @pytest.mark.api
    async def test_disable_with_wrong_pin(self, client):
        await client.post("/settings/pin", json={"pin": "1234", "confirmPin": "1234"})

        response = await client.request("DELETE", "/settings/pin", json={"pin": "9999"})

        assert response.status_code == 403
        assert (await client.post("/settings/pin/verify", json={"pin": "9999"})).json() == {"valid": False}

    @pytest.mark.integration
    @pytest.mark.api
    async def test_non_ascii_pin_is_rejected_not_an_error(self, client):
        await client.post("/settings/pin", json={"pin": "1234", "confirmPin": "1234"})

        verify = await client.post("/settings/pin/verify", json={"pin": "é123"})
        disable = await client.request("DELETE", "/settings/pin", json={"pin": "é123"})

        assert verify.status_code == 200
        assert verify.json() == {"valid": False}
        assert disable.status_code == 403
        assert (await client.get("/settings")).json()["settings"]["securityPin"] == "1234"
