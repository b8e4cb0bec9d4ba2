# in-memory mock patient store, scoped to one server session
# nothing is persisted: restarting the process regenerates everything

import logging
import random
from datetime import datetime, timezone
from typing import Optional

from mediview.config import settings
from mediview.errors import PatientNotFoundError
from mediview.models.clinical import Medication, MedicationCreate
from mediview.models.patient import PatientProfile, PatientSummary
from mediview.models.treatment import InsightDetails, InsightEvent, TreatmentEvent
from mediview.models.wearable import WearableReading
from mediview.services.generators import build_patient_profile, generate_patient_summaries, newest_first
from mediview.services.ids import IdGenerator, SequentialIdGenerator, make_id_generator

logger = logging.getLogger(__name__)


def insert_event(profile: PatientProfile, event: TreatmentEvent) -> None:
    """prepend an event and keep the timeline sorted newest first"""
    profile.treatment_history = newest_first(
        [event, *profile.treatment_history],
        key=lambda e: e.timestamp,
    )


class MockStore:
    """session-scoped mock data provider"""

    def __init__(
        self,
        seed: Optional[int] = None,
        ids: Optional[IdGenerator] = None,
        now: Optional[datetime] = None,
    ):
        self.seed = seed
        self.ids = ids
        self._owns_ids = ids is None
        self.now = now
        self.rng: Optional[random.Random] = None
        self._summaries: list[PatientSummary] = []
        self._profiles: dict[str, PatientProfile] = {}

    def populate(self):
        """generate the roster and every profile, in roster order"""
        if self._summaries:
            return

        self.rng = random.Random(self.seed)
        if self.ids is None:
            self.ids = make_id_generator(settings.MOCK_ID_STRATEGY)

        # roster ids stay pat_1..pat_n regardless of the entity id strategy
        self._summaries = generate_patient_summaries(self.rng, SequentialIdGenerator(), self.clock())

        # built up front so a profile never depends on which patients were opened first
        for index, summary in enumerate(self._summaries):
            self._profiles[summary.id] = self._build_profile(summary, index)
        logger.info(f"Mock store populated with {len(self._summaries)} patients (seed: {self.seed})")

    def _profile_rng(self, summary: PatientSummary) -> random.Random:
        """one generator per patient, derived from the seed and the patient id"""
        if self.seed is None:
            return self.rng
        return random.Random(f"{self.seed}:{summary.id}")

    def _build_profile(self, summary: PatientSummary, index: int) -> PatientProfile:
        profile = build_patient_profile(
            summary,
            index,
            self._profile_rng(summary),
            self.ids,
            self.clock(),
            wearable_days=settings.WEARABLE_HISTORY_DAYS,
            filler_count=settings.FILLER_EVENT_COUNT,
        )
        logger.debug(f"Generated profile for patient {summary.id}")
        return profile

    def reset(self):
        self._summaries = []
        self._profiles = {}
        if self._owns_ids:
            self.ids = None
        self.populate()

    def clock(self) -> datetime:
        return self.now or datetime.now(timezone.utc)

    # data provider

    def list_patient_summaries(self) -> list[PatientSummary]:
        self.populate()
        return [summary.model_copy(deep=True) for summary in self._summaries]

    def get_patient_profile(self, patient_id: str) -> Optional[PatientProfile]:
        self.populate()
        return self._profiles.get(patient_id)

    def require_profile(self, patient_id: str) -> PatientProfile:
        profile = self.get_patient_profile(patient_id)
        if profile is None:
            raise PatientNotFoundError(patient_id)
        return profile

    def list_medications(self, patient_id: str) -> list[Medication]:
        return list(self.require_profile(patient_id).medications)

    def list_wearable_readings(self, patient_id: str) -> list[WearableReading]:
        return list(self.require_profile(patient_id).wearable_data)

    # mutations

    def add_medication(self, patient_id: str, data: MedicationCreate) -> Medication:
        profile = self.require_profile(patient_id)
        medication = Medication(
            id=self.ids.next_id("med"),
            patient_id=patient_id,
            name=data.name,
            dosage=data.dosage,
            schedule=data.schedule,
            reminders_enabled=data.reminders_enabled,
            added_at=self.clock(),
        )
        profile.medications.append(medication)
        logger.info(f"Medication {medication.id} added for patient {patient_id}")
        return medication

    def record_insight(self, patient_id: str, insights: str) -> InsightEvent:
        """store the latest ai summary and log it on the treatment timeline"""
        profile = self.require_profile(patient_id)
        event = InsightEvent(
            id=self.ids.next_id("evt_insight"),
            timestamp=self.clock(),
            description="New AI insights generated",
            details=InsightDetails(insights=insights),
        )
        profile.ai_insights = insights
        insert_event(profile, event)
        logger.info(f"Insight recorded for patient {patient_id}")
        return event


# singleton instance
store = MockStore(seed=settings.MOCK_SEED)


async def get_store() -> MockStore:
    """dependency injection for mock data access"""
    return store
