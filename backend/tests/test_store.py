# tests for the session-scoped mock store

import pytest

from mediview.config import settings
from mediview.errors import PatientNotFoundError
from mediview.models.clinical import MedicationCreate
from mediview.services.store import MockStore
from tests.conftest import ANA_ID, BRUNO_ID, NOW, SEED, UNKNOWN_ID, make_store


class TestPopulate:
    """roster generation"""

    def test_roster(self, store):
        summaries = store.list_patient_summaries()
        assert len(summaries) == 8
        assert summaries[0].id == ANA_ID

    def test_populate_is_idempotent(self, store):
        before = store.list_patient_summaries()
        store.populate()
        assert store.list_patient_summaries() == before

    def test_same_seed_same_data(self):
        a, b = make_store(), make_store()
        assert a.list_patient_summaries() == b.list_patient_summaries()
        assert a.require_profile(BRUNO_ID) == b.require_profile(BRUNO_ID)

    def test_profile_independent_of_access_order(self, monkeypatch):
        monkeypatch.setattr(settings, "MOCK_ID_STRATEGY", "sequence")
        direct = MockStore(seed=SEED, now=NOW)
        after_other = MockStore(seed=SEED, now=NOW)
        after_other.require_profile(ANA_ID)

        a = direct.require_profile(BRUNO_ID)
        b = after_other.require_profile(BRUNO_ID)
        assert [r.heart_rate_bpm for r in a.wearable_data] == [r.heart_rate_bpm for r in b.wearable_data]
        assert a.mood_checkins[0].id == b.mood_checkins[0].id
        assert a == b

    def test_profile_follows_seed(self):
        a, b = make_store(), make_store(seed=SEED + 1)
        assert a.require_profile(ANA_ID).wearable_data != b.require_profile(ANA_ID).wearable_data
        assert make_store().require_profile(ANA_ID).wearable_data == a.require_profile(ANA_ID).wearable_data

    def test_reset_reproduces_profiles(self, monkeypatch):
        monkeypatch.setattr(settings, "MOCK_ID_STRATEGY", "sequence")
        store = MockStore(seed=SEED, now=NOW)
        before = store.require_profile(BRUNO_ID).model_copy(deep=True)
        store.reset()
        assert store.require_profile(BRUNO_ID) == before

    def test_summaries_are_copies(self, store):
        summaries = store.list_patient_summaries()
        summaries[0].name = "Changed"
        assert store.list_patient_summaries()[0].name == "Ana Silva"

    def test_reset(self, store):
        profile = store.require_profile(ANA_ID)
        profile.ai_insights = "edited"
        store.reset()
        assert store.require_profile(ANA_ID).ai_insights != "edited"


class TestProfiles:
    """lazily generated, cached profiles"""

    def test_profile_cached(self, store):
        assert store.get_patient_profile(ANA_ID) is store.get_patient_profile(ANA_ID)

    def test_profile_matches_summary(self, store):
        summary = store.list_patient_summaries()[1]
        profile = store.require_profile(BRUNO_ID)
        assert profile.name == summary.name
        assert profile.last_mood == summary.last_mood
        assert profile.medication_adherence == summary.medication_adherence

    def test_unknown_patient(self, store):
        assert store.get_patient_profile(UNKNOWN_ID) is None
        with pytest.raises(PatientNotFoundError):
            store.require_profile(UNKNOWN_ID)


class TestMutations:
    """medications and insights"""

    def test_add_medication(self, store):
        medication = store.add_medication(ANA_ID, MedicationCreate(name="Lithium", dosage="300mg", schedule="Night"))
        assert medication.patient_id == ANA_ID
        assert medication.added_at == NOW
        assert store.list_medications(ANA_ID)[-1] == medication

    def test_add_medication_unknown_patient(self, store):
        with pytest.raises(PatientNotFoundError):
            store.add_medication(UNKNOWN_ID, MedicationCreate(name="X", dosage="1mg", schedule="Morning"))

    def test_record_insight(self, store):
        event = store.record_insight(ANA_ID, "Watch sleep.")
        profile = store.require_profile(ANA_ID)
        assert profile.ai_insights == "Watch sleep."
        assert profile.treatment_history[0] == event
        assert event.type == "insight"
        assert not event.synthetic
