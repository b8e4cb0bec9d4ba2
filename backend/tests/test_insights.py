# tests for insights router: generation, storage, and error mapping
# the langchain chain is mocked

from unittest.mock import AsyncMock, MagicMock, patch

from tests.conftest import ANA_ID, UNKNOWN_ID


def _mock_chain(result=None, side_effect=None):
    chain = MagicMock()
    chain.ainvoke = AsyncMock(return_value=result, side_effect=side_effect)
    return chain


class TestGenerateInsights:
    """POST /insights"""

    async def test_generate_success(self, client, store):
        chain = _mock_chain("Low mood correlates with short sleep this week.")
        with patch("mediview.services.insight_service.get_insight_chain", return_value=chain):
            resp = await client.post("/insights", json={"patientId": ANA_ID})

        assert resp.status_code == 200
        assert resp.json()["insights"] == "Low mood correlates with short sleep this week."

        profile = store.require_profile(ANA_ID)
        assert profile.ai_insights == "Low mood correlates with short sleep this week."
        assert profile.treatment_history[0].type == "insight"
        assert profile.treatment_history[0].description == "New AI insights generated"

    async def test_unknown_patient(self, client):
        chain = _mock_chain("unused")
        with patch("mediview.services.insight_service.get_insight_chain", return_value=chain):
            resp = await client.post("/insights", json={"patientId": UNKNOWN_ID})
        assert resp.status_code == 404
        chain.ainvoke.assert_not_called()

    async def test_empty_response(self, client, store):
        before = store.require_profile(ANA_ID).ai_insights
        with patch("mediview.services.insight_service.get_insight_chain", return_value=_mock_chain("")):
            resp = await client.post("/insights", json={"patientId": ANA_ID})
        assert resp.status_code == 502
        assert resp.json()["detail"] == "The AI response was empty"
        assert store.require_profile(ANA_ID).ai_insights == before

    async def test_model_failure(self, client):
        chain = _mock_chain(side_effect=RuntimeError("timeout"))
        with patch("mediview.services.insight_service.get_insight_chain", return_value=chain):
            resp = await client.post("/insights", json={"patientId": ANA_ID})
        assert resp.status_code == 502
        assert "timeout" in resp.json()["detail"]

    async def test_missing_patient_id(self, client):
        resp = await client.post("/insights", json={})
        assert resp.status_code == 422
