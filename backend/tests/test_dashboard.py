# tests for dashboard router: stats cards and distribution charts


class TestDashboardStats:
    """dashboard aggregate stats"""

    async def test_get_stats(self, client):
        resp = await client.get("/dashboard/stats")
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalPatients"] == 8
        assert data["lowAdherencePatients"] == 1
        assert data["decliningMoodPatients"] == 3
        assert len(data["recentPatients"]) == 5

    async def test_recent_limit(self, client):
        resp = await client.get("/dashboard/stats?recent=2")
        assert [p["name"] for p in resp.json()["recentPatients"]] == ["Ana Silva", "Bruno Costa"]


class TestDistributions:
    """chart data"""

    async def test_mood_distribution(self, client):
        resp = await client.get("/dashboard/mood-distribution")
        assert resp.status_code == 200
        data = resp.json()
        assert [(e["mood"], e["count"]) for e in data] == [
            ("Calm", 2), ("Anxious", 1), ("Happy", 2), ("Sad", 1), ("Stressed", 1), ("Irritable", 1),
        ]
        assert all(e["fill"].startswith("hsl(") for e in data)

    async def test_adherence_distribution(self, client):
        resp = await client.get("/dashboard/adherence-distribution")
        assert resp.status_code == 200
        data = resp.json()
        assert [(e["bucket"], e["count"]) for e in data] == [("low", 1), ("medium", 3), ("high", 4)]
        assert sum(e["count"] for e in data) == 8
