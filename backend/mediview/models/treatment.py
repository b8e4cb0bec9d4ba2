# treatment history models: one timeline entry per event, tagged by type
# each event type carries its own typed details payload

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field

from mediview.models.clinical import MoodCheckin, Note


EventType = Literal["moodCheckin", "medication", "note", "activity", "insight", "crisis", "achievement"]

# event types that only ever come from the synthetic filler generator
FILLER_EVENT_TYPES: tuple[str, ...] = ("medication", "activity", "insight", "crisis", "achievement")


class MedicationEventDetails(BaseModel):
    medication_name: Optional[str] = Field(None, alias="medicationName")
    taken: bool = True

    model_config = {"populate_by_name": True}


class ActivityDetails(BaseModel):
    activity: str


class InsightDetails(BaseModel):
    insights: Optional[str] = None


class CrisisDetails(BaseModel):
    note: Optional[str] = None


class AchievementDetails(BaseModel):
    goal: str


class TreatmentEventBase(BaseModel):
    id: str
    timestamp: datetime
    description: str
    # true for generated filler events so they never get mixed up with derived history
    synthetic: bool = False


class MoodCheckinEvent(TreatmentEventBase):
    type: Literal["moodCheckin"] = "moodCheckin"
    details: MoodCheckin


class NoteEvent(TreatmentEventBase):
    type: Literal["note"] = "note"
    details: Note


class MedicationEvent(TreatmentEventBase):
    type: Literal["medication"] = "medication"
    details: Optional[MedicationEventDetails] = None


class ActivityEvent(TreatmentEventBase):
    type: Literal["activity"] = "activity"
    details: Optional[ActivityDetails] = None


class InsightEvent(TreatmentEventBase):
    type: Literal["insight"] = "insight"
    details: Optional[InsightDetails] = None


class CrisisEvent(TreatmentEventBase):
    type: Literal["crisis"] = "crisis"
    details: Optional[CrisisDetails] = None


class AchievementEvent(TreatmentEventBase):
    type: Literal["achievement"] = "achievement"
    details: Optional[AchievementDetails] = None


TreatmentEvent = Annotated[
    Union[
        MoodCheckinEvent,
        NoteEvent,
        MedicationEvent,
        ActivityEvent,
        InsightEvent,
        CrisisEvent,
        AchievementEvent,
    ],
    Field(discriminator="type"),
]
