"""Tests for personal activities."""


def activity(title="Hearing", activity_date="2025-05-02", activity_time="09:30:00", **extra):
    payload = {
        "title": title,
        "description": "Family court, room 3",
        "activity_date": activity_date,
        "activity_time": activity_time,
        "category": "hearing",
    }
    payload.update(extra)
    return payload


class TestActivities:
    def test_create_and_list_latest_first(self, client, auth_headers):
        client.post("/api/activities", json=activity("Early", "2025-05-01"), headers=auth_headers)
        client.post(
            "/api/activities", json=activity("Morning", "2025-05-03", "08:00:00"), headers=auth_headers
        )
        client.post(
            "/api/activities", json=activity("Afternoon", "2025-05-03", "15:00:00"), headers=auth_headers
        )

        resp = client.get("/api/activities", headers=auth_headers)

        assert resp.status_code == 200
        assert [a["title"] for a in resp.json()] == ["Afternoon", "Morning", "Early"]

    def test_create_defaults(self, client, auth_headers):
        resp = client.post("/api/activities", json=activity(), headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json()["completed"] is False
        assert resp.json()["national_id"] is None

    def test_update(self, client, auth_headers):
        created = client.post("/api/activities", json=activity(), headers=auth_headers).json()

        resp = client.put(
            f"/api/activities/{created['id']}",
            json=activity("Hearing moved", "2025-05-09", national_id="1710034065"),
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert resp.json()["title"] == "Hearing moved"
        assert resp.json()["activity_date"] == "2025-05-09"
        assert resp.json()["national_id"] == "1710034065"

    def test_toggle(self, client, auth_headers):
        created = client.post("/api/activities", json=activity(), headers=auth_headers).json()

        first = client.patch(f"/api/activities/{created['id']}/toggle", headers=auth_headers)
        second = client.patch(f"/api/activities/{created['id']}/toggle", headers=auth_headers)

        assert first.json()["completed"] is True
        assert second.json()["completed"] is False

    def test_delete(self, client, auth_headers):
        created = client.post("/api/activities", json=activity(), headers=auth_headers).json()

        resp = client.delete(f"/api/activities/{created['id']}", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Activity deleted successfully"}
        assert client.get("/api/activities", headers=auth_headers).json() == []

    def test_missing_activity(self, client, auth_headers):
        assert client.put("/api/activities/999", json=activity(), headers=auth_headers).status_code == 404
        assert client.patch("/api/activities/999/toggle", headers=auth_headers).status_code == 404
        assert client.delete("/api/activities/999", headers=auth_headers).status_code == 404
