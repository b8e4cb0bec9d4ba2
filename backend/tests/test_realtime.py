# tests for the simulated realtime biofeedback stream

import asyncio
import random

import pytest
from fastapi.testclient import TestClient
from fastapi.websockets import WebSocketDisconnect

from mediview.config import settings
from mediview.main import app
from mediview.models.wearable import WearableReading
from mediview.services.realtime import (
    RealtimeSnapshot,
    RealtimeStream,
    StreamRegistry,
    snapshot_from_reading,
    step_snapshot,
)
from mediview.services.store import get_store
from tests.conftest import ANA_ID, NOW, UNKNOWN_ID


class TestSnapshots:
    """seeding and stepping"""

    def test_defaults_without_reading(self):
        snapshot = snapshot_from_reading(None)
        assert snapshot == RealtimeSnapshot(75, 60, 0.8)

    def test_partial_reading(self):
        snapshot = snapshot_from_reading(WearableReading(timestamp=NOW, heart_rate_bpm=90))
        assert snapshot.heart_rate_bpm == 90
        assert snapshot.heart_rate_variability_ms == 60

    def test_steps_stay_in_range(self):
        rng = random.Random(1)
        snapshot = RealtimeSnapshot(119, 26, 2.4)
        for _ in range(1000):
            snapshot = step_snapshot(snapshot, rng)
            assert 50 <= snapshot.heart_rate_bpm <= 120
            assert 25 <= snapshot.heart_rate_variability_ms <= 130
            assert 0.1 <= snapshot.eda_microsiemens <= 2.5

    def test_step_size_bounded(self):
        rng = random.Random(2)
        snapshot = RealtimeSnapshot(80, 60, 1.0)
        for _ in range(200):
            nxt = step_snapshot(snapshot, rng)
            assert abs(nxt.heart_rate_bpm - snapshot.heart_rate_bpm) <= 2
            assert abs(nxt.heart_rate_variability_ms - snapshot.heart_rate_variability_ms) <= 3
            snapshot = nxt

    def test_eda_moves_every_step(self):
        rng = random.Random(4)
        snapshot = RealtimeSnapshot(75, 60, 0.8)
        for _ in range(20):
            nxt = step_snapshot(snapshot, rng)
            assert nxt.eda_microsiemens != snapshot.eda_microsiemens
            snapshot = nxt

    def test_to_dict_rounds_eda(self):
        assert RealtimeSnapshot(70, 55, 0.86).to_dict()["edaMicrosiemens"] == 0.9

    def test_to_dict(self):
        assert RealtimeSnapshot(70, 55, 0.9).to_dict() == {
            "heartRateBpm": 70,
            "heartRateVariabilityMs": 55,
            "edaMicrosiemens": 0.9,
        }


class TestRealtimeStream:
    """task lifecycle"""

    async def test_emits_until_cancelled(self):
        received = []

        async def on_update(snapshot):
            received.append(snapshot)

        stream = RealtimeStream(RealtimeSnapshot(75, 60, 0.8), on_update, 0.01, random.Random(3)).start()
        await asyncio.sleep(0.08)
        await stream.cancel()

        assert len(received) >= 2
        assert received[0] == RealtimeSnapshot(75, 60, 0.8)
        assert not stream.running

        count = len(received)
        await asyncio.sleep(0.05)
        assert len(received) == count

    async def test_cancel_is_idempotent(self):
        async def on_update(snapshot):
            pass

        stream = RealtimeStream(RealtimeSnapshot(75, 60, 0.8), on_update, 0.01).start()
        await stream.cancel()
        await stream.cancel()
        assert not stream.running

    async def test_failed_callback_ends_stream(self):
        async def on_update(snapshot):
            raise RuntimeError("socket closed")

        stream = RealtimeStream(RealtimeSnapshot(75, 60, 0.8), on_update, 0.01).start()
        await asyncio.sleep(0.02)
        assert not stream.running
        await stream.cancel()

    async def test_registry_cancel_all(self):
        async def on_update(snapshot):
            pass

        registry = StreamRegistry()
        live = [RealtimeStream(RealtimeSnapshot(75, 60, 0.8), on_update, 0.01).start() for _ in range(3)]
        for stream in live:
            registry.add(stream)
        assert len(registry) == 3

        await registry.cancel_all()
        assert len(registry) == 0
        assert not any(s.running for s in live)


class TestRealtimeWebsocket:
    """websocket endpoint"""

    @pytest.fixture
    def ws_client(self, store, monkeypatch):
        monkeypatch.setattr(settings, "REALTIME_INTERVAL_SECONDS", 0.01)

        async def override_get_store():
            return store

        app.dependency_overrides[get_store] = override_get_store
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_streams_snapshots(self, ws_client, store):
        last = store.require_profile(ANA_ID).wearable_data[-1]
        with ws_client.websocket_connect(f"/patients/{ANA_ID}/realtime") as ws:
            first = ws.receive_json()
            second = ws.receive_json()

        assert first["heartRateBpm"] == last.heart_rate_bpm
        assert set(second) == {"heartRateBpm", "heartRateVariabilityMs", "edaMicrosiemens"}
        assert abs(second["heartRateBpm"] - first["heartRateBpm"]) <= 2

    def test_unknown_patient_rejected(self, ws_client):
        with pytest.raises(WebSocketDisconnect):
            with ws_client.websocket_connect(f"/patients/{UNKNOWN_ID}/realtime") as ws:
                ws.receive_json()
