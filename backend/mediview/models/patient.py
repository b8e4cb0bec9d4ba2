# patient models: list summaries and the full profile view
# mirrors frontend types/patient.ts PatientSummary, PatientProfile

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from mediview.models.clinical import Medication, MoodCheckin, Note
from mediview.models.treatment import TreatmentEvent
from mediview.models.wearable import WearableReading


MoodTrend = Literal["up", "down", "stable"]


class PatientSummary(BaseModel):
    id: str
    name: str
    last_mood: Optional[str] = Field(None, alias="lastMood")
    mood_trend: Optional[MoodTrend] = Field(None, alias="moodTrend")
    recent_activity: Optional[str] = Field(None, alias="recentActivity")
    medication_adherence: Optional[int] = Field(None, ge=0, le=100, alias="medicationAdherence")
    last_checkin: Optional[datetime] = Field(None, alias="lastCheckin")

    model_config = {"populate_by_name": True}


class PatientProfile(PatientSummary):
    """summary plus everything shown on the patient's profile tabs"""
    date_joined: datetime = Field(..., alias="dateJoined")
    wearable_data: list[WearableReading] = Field(default_factory=list, alias="wearableData")
    mood_checkins: list[MoodCheckin] = Field(default_factory=list, alias="moodCheckins")
    medications: list[Medication] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    treatment_history: list[TreatmentEvent] = Field(default_factory=list, alias="treatmentHistory")
    ai_insights: Optional[str] = Field(None, alias="aiInsights")

    model_config = {"populate_by_name": True}
