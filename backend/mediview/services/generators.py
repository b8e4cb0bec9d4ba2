# synthetic patient data generators
# every function takes an injected rng, id generator, and clock so a seeded run is reproducible
#
# wearable series are bounded random walks: each new value is the previous value
# plus a small random delta, clamped to a physiological range after every step

import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, TypeVar

from mediview.models.clinical import Medication, MoodCheckin, Note
from mediview.models.patient import PatientProfile, PatientSummary
from mediview.models.treatment import (
    FILLER_EVENT_TYPES,
    AchievementDetails,
    AchievementEvent,
    ActivityDetails,
    ActivityEvent,
    CrisisDetails,
    CrisisEvent,
    InsightDetails,
    InsightEvent,
    MedicationEvent,
    MedicationEventDetails,
    MoodCheckinEvent,
    NoteEvent,
    TreatmentEvent,
)
from mediview.models.wearable import MovementSummary, SleepSummary, WearableReading
from mediview.services.ids import IdGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")

MOODS = ["Happy", "Calm", "Anxious", "Sad", "Irritable", "Stressed"]
ACTIVITIES = ["Used Focus Timer", "Breathing Exercise", "Took Medication", "Quick Note", "Light Walk"]
SYMPTOMS = ["Headache", "Fatigue", "Insomnia", "Loss of appetite", "Nausea", "Dizziness"]

HISTORY_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
SUMMARY_CHECKIN_START = datetime(2024, 6, 1, tzinfo=timezone.utc)
JOIN_WINDOW = (datetime(2023, 1, 1, tzinfo=timezone.utc), datetime(2024, 1, 1, tzinfo=timezone.utc))

# name, last mood, mood trend, recent activity, medication adherence
PATIENT_ROSTER = [
    ("Ana Silva", "Calm", "stable", "Used Focus Timer", 90),
    ("Bruno Costa", "Anxious", "down", "Breathing Exercise", 75),
    ("Carla Dias", "Happy", "up", "Took Medication", 100),
    ("Daniel Martins", "Sad", "stable", "Quick Note", 80),
    ("Eduarda Ferreira", "Stressed", "down", "Used Focus Timer", 60),
    ("Fábio Gomes", "Calm", "up", "Light Walk", 95),
    ("Gabriela Lima", "Irritable", "down", "None", 88),
    ("Hugo Mendes", "Happy", "stable", "Breathing Exercise", 92),
]

# prescriptions by roster position: name, dosage, schedule, reminders, prescribed on
PRESCRIPTIONS = {
    0: [("Sertraline", "50mg", "Morning", True, date(2024, 2, 15)),
        ("Clonazepam", "0.5mg", "Night", False, date(2024, 2, 15))],
    1: [("Methylphenidate LA", "20mg", "Morning", True, date(2024, 4, 1))],
    2: [("Venlafaxine", "75mg", "Morning", True, date(2023, 12, 10))],
    3: [("Escitalopram", "10mg", "Morning", True, date(2024, 1, 5))],
    4: [("Quetiapine", "25mg", "Night", False, date(2024, 5, 20))],
    5: [("Atenolol", "50mg", "Morning", True, date(2024, 3, 28))],
}
DEFAULT_REGIMEN = [
    ("Sertraline", "50mg", "Morning", True, date(2024, 1, 15)),
    ("Methylphenidate LA", "20mg", "Morning", True, date(2024, 1, 15)),
    ("Clonazepam", "0.5mg", "Night", False, date(2024, 1, 15)),
]

CANNED_INSIGHTS = (
    "Patient shows improving mood stability, but adherence to 'Methylphenidate LA' needs attention. "
    "Monitor stress levels over the next few days.",
    "Recent data suggests an improvement in sleep quality. Mood trend is stable. "
    "Keep monitoring physical activity and emotional check-ins.",
)

NOTE_TEMPLATE = (
    "Patient reported [symptom or event]. Discussed [plan or intervention]. "
    "Next steps include [action]. Additional observations: [details]."
)


@dataclass(frozen=True)
class WalkSpec:
    """start value, per-step delta bounds, and clamp range for one metric"""
    start: float
    min_delta: float
    max_delta: float
    low: float
    high: float
    integer: bool = False


WEARABLE_WALKS = {
    "heart_rate_bpm": WalkSpec(75, -5, 5, 55, 110, integer=True),
    "heart_rate_variability_ms": WalkSpec(60, -8, 8, 35, 100, integer=True),
    "eda_microsiemens": WalkSpec(0.8, -0.15, 0.15, 0.3, 1.5),
    "body_temperature_celsius": WalkSpec(36.5, -0.2, 0.2, 35.8, 37.5),
    "step_count": WalkSpec(5000, -1000, 1500, 500, 30000, integer=True),
    "sleep_hours": WalkSpec(7.0, -0.75, 0.75, 4.5, 9.5),
}


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def bounded_step(value: float, spec: WalkSpec, rng: random.Random) -> float:
    """one random walk step, clamped to the walk's range"""
    if spec.integer:
        delta = rng.randint(int(spec.min_delta), int(spec.max_delta))
    else:
        delta = rng.uniform(spec.min_delta, spec.max_delta)
    return clamp(value + delta, spec.low, spec.high)


def sleep_quality(duration_hours: float) -> str:
    if duration_hours > 7.5:
        return "Good"
    if duration_hours > 6:
        return "Fair"
    return "Poor"


def random_datetime(rng: random.Random, start: datetime, end: datetime) -> datetime:
    return start + (end - start) * rng.random()


def newest_first(items: list[T], key: Callable[[T], datetime]) -> list[T]:
    """stable descending sort; ties keep their insertion order"""
    return sorted(items, key=key, reverse=True)


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def generate_wearable_series(
    count: int,
    rng: random.Random,
    now: Optional[datetime] = None,
) -> list[WearableReading]:
    """one reading per day for the last `count` days, oldest first"""
    now = _now(now)
    state = {name: spec.start for name, spec in WEARABLE_WALKS.items()}
    readings = []

    for i in range(count):
        for name, spec in WEARABLE_WALKS.items():
            state[name] = bounded_step(state[name], spec, rng)

        sleep_hours = round(state["sleep_hours"], 1)
        readings.append(WearableReading(
            timestamp=now - timedelta(days=count - i),
            heart_rate_bpm=int(state["heart_rate_bpm"]),
            heart_rate_variability_ms=int(state["heart_rate_variability_ms"]),
            eda_microsiemens=round(state["eda_microsiemens"], 1),
            body_temperature_celsius=round(state["body_temperature_celsius"], 1),
            sleep_data=SleepSummary(quality=sleep_quality(sleep_hours), duration_hours=sleep_hours),
            movement_data=MovementSummary(step_count=int(state["step_count"])),
        ))

    return readings


def generate_mood_checkins(
    count: int,
    rng: random.Random,
    ids: IdGenerator,
    now: Optional[datetime] = None,
    start: datetime = HISTORY_START,
) -> list[MoodCheckin]:
    """random check-ins between start and now, newest first"""
    now = _now(now)
    checkins = []
    for i in range(count):
        checkins.append(MoodCheckin(
            id=ids.next_id("mc"),
            timestamp=random_datetime(rng, start, now),
            mood=rng.choice(MOODS),
            symptoms=rng.sample(SYMPTOMS, rng.randint(0, 3)),
            notes=f"Observation about mood {i}" if rng.random() > 0.7 else None,
        ))
    return newest_first(checkins, key=lambda c: c.timestamp)


def generate_notes(
    count: int,
    rng: random.Random,
    ids: IdGenerator,
    now: Optional[datetime] = None,
    start: datetime = HISTORY_START,
) -> list[Note]:
    now = _now(now)
    notes = []
    for i in range(count):
        created_at = random_datetime(rng, start, now)
        # most notes are never edited after creation
        updated_at = created_at if rng.random() > 0.3 else random_datetime(rng, created_at, now)
        notes.append(Note(
            id=ids.next_id("note"),
            created_at=created_at,
            updated_at=updated_at,
            title=f"Clinical note {i + 1}",
            content=NOTE_TEMPLATE,
        ))
    return newest_first(notes, key=lambda n: n.created_at)


def generate_medications(patient_id: str, index: int, ids: IdGenerator) -> list[Medication]:
    """current prescriptions for the patient at roster position `index`"""
    prescriptions = PRESCRIPTIONS.get(index, DEFAULT_REGIMEN)
    return [
        Medication(
            id=ids.next_id("med"),
            patient_id=patient_id,
            name=name,
            dosage=dosage,
            schedule=schedule,
            reminders_enabled=reminders,
            added_at=datetime(added.year, added.month, added.day, tzinfo=timezone.utc),
        )
        for name, dosage, schedule, reminders, added in prescriptions
    ]


def _filler_event(event_type: str, event_id: str, timestamp: datetime, rng: random.Random) -> TreatmentEvent:
    if event_type == "medication":
        return MedicationEvent(
            id=event_id, timestamp=timestamp, synthetic=True,
            description="Medication logged as taken",
            details=MedicationEventDetails(taken=True),
        )
    if event_type == "activity":
        activity = rng.choice(ACTIVITIES)
        return ActivityEvent(
            id=event_id, timestamp=timestamp, synthetic=True,
            description=f"Activity completed: {activity}",
            details=ActivityDetails(activity=activity),
        )
    if event_type == "insight":
        suggestion = "Suggest monitoring sleep"
        return InsightEvent(
            id=event_id, timestamp=timestamp, synthetic=True,
            description=f"AI insight: {suggestion}",
            details=InsightDetails(insights=suggestion),
        )
    if event_type == "crisis":
        return CrisisEvent(
            id=event_id, timestamp=timestamp, synthetic=True,
            description="Reported a crisis moment / heightened anxiety",
            details=CrisisDetails(),
        )
    if event_type == "achievement":
        return AchievementEvent(
            id=event_id, timestamp=timestamp, synthetic=True,
            description="Achievement: step goal reached",
            details=AchievementDetails(goal="Daily step goal"),
        )
    raise ValueError(f"Not a filler event type: {event_type}")


def generate_treatment_history(
    mood_checkins: list[MoodCheckin],
    notes: list[Note],
    rng: random.Random,
    ids: IdGenerator,
    now: Optional[datetime] = None,
    filler_count: int = 15,
    start: datetime = HISTORY_START,
) -> list[TreatmentEvent]:
    """project check-ins and notes into events, add synthetic filler, newest first"""
    now = _now(now)
    events: list[TreatmentEvent] = []

    for checkin in mood_checkins:
        events.append(MoodCheckinEvent(
            id=ids.next_id("evt_mc"),
            timestamp=checkin.timestamp,
            description=f"Mood check-in: {checkin.mood}",
            details=checkin,
        ))

    for note in notes:
        events.append(NoteEvent(
            id=ids.next_id("evt_note"),
            timestamp=note.created_at,
            description=f"Note added: {note.title}",
            details=note,
        ))

    for _ in range(filler_count):
        event_type = rng.choice(FILLER_EVENT_TYPES)
        events.append(_filler_event(
            event_type,
            ids.next_id("evt_other"),
            random_datetime(rng, start, now),
            rng,
        ))

    return newest_first(events, key=lambda e: e.timestamp)


def generate_patient_summaries(
    rng: random.Random,
    ids: IdGenerator,
    now: Optional[datetime] = None,
) -> list[PatientSummary]:
    now = _now(now)
    return [
        PatientSummary(
            id=ids.next_id("pat"),
            name=name,
            last_mood=mood,
            mood_trend=trend,
            recent_activity=activity,
            medication_adherence=adherence,
            last_checkin=random_datetime(rng, SUMMARY_CHECKIN_START, now),
        )
        for name, mood, trend, activity, adherence in PATIENT_ROSTER
    ]


def build_patient_profile(
    summary: PatientSummary,
    index: int,
    rng: random.Random,
    ids: IdGenerator,
    now: Optional[datetime] = None,
    wearable_days: int = 30,
    filler_count: int = 15,
) -> PatientProfile:
    """expand a summary into a full profile; roster index varies the volume of data"""
    now = _now(now)
    mood_checkins = generate_mood_checkins(15 + index, rng, ids, now)
    notes = generate_notes(3 + index // 2, rng, ids, now)
    history = generate_treatment_history(mood_checkins, notes, rng, ids, now, filler_count=filler_count)

    profile = PatientProfile(
        **summary.model_dump(),
        date_joined=random_datetime(rng, *JOIN_WINDOW),
        wearable_data=generate_wearable_series(wearable_days, rng, now),
        mood_checkins=mood_checkins,
        medications=generate_medications(summary.id, index, ids),
        notes=notes,
        treatment_history=history,
        ai_insights=CANNED_INSIGHTS[index % 2],
    )
    logger.debug(f"Built profile {summary.id}: {len(mood_checkins)} check-ins, {len(notes)} notes, {len(history)} events")
    return profile
