"""Tests for survey capture and statistics."""


def survey(channel=None, info="excellent", guidance="good", satisfaction="excellent", again=True):
    return {
        "national_id": "1710034065",
        "referral_channel": channel,
        "information_rating": info,
        "guidance_rating": guidance,
        "satisfaction_rating": satisfaction,
        "would_use_again": again,
        "comments": "Very helpful",
    }


class TestSurveys:
    def test_create(self, client, auth_headers):
        resp = client.post("/api/surveys", json=survey("Radio"), headers=auth_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"] > 0
        assert body["information_rating"] == "excellent"

    def test_rejects_unknown_rating(self, client, auth_headers):
        resp = client.post("/api/surveys", json=survey(info="great"), headers=auth_headers)
        assert resp.status_code == 422

    def test_stats_empty(self, client, auth_headers):
        resp = client.get("/api/surveys/stats", headers=auth_headers)
        assert resp.status_code == 200
        rows = resp.json()
        assert len(rows) == 1
        assert rows[0]["total"] == 0
        assert rows[0]["referral_channel"] is None

    def test_stats(self, client, auth_headers):
        for payload in (
            survey("Facebook"),
            survey("Facebook", info="poor", guidance="poor", again=False),
            survey("Radio", info="good", satisfaction="good"),
            survey(None, guidance="excellent"),
        ):
            client.post("/api/surveys", json=payload, headers=auth_headers)

        rows = client.get("/api/surveys/stats", headers=auth_headers).json()

        totals = rows[0]
        assert totals["referral_channel"] is None
        assert totals["channel_count"] is None
        assert totals["total"] == 4
        assert (totals["info_excellent"], totals["info_good"], totals["info_poor"]) == (2, 1, 1)
        assert (
            totals["guidance_excellent"], totals["guidance_good"], totals["guidance_poor"]
        ) == (1, 2, 1)
        assert (totals["satisfaction_excellent"], totals["satisfaction_good"]) == (3, 1)
        assert totals["would_use_again"] == 3

        assert [(r["referral_channel"], r["channel_count"]) for r in rows[1:]] == [
            ("Facebook", 2),
            ("Radio", 1),
        ]
        # Channel rows repeat the totals
        assert all(r["total"] == 4 for r in rows)

    def test_requires_token(self, client):
        assert client.get("/api/surveys/stats").status_code == 401
