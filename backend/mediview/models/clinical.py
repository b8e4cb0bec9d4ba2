# clinical models: mood check-ins, clinician notes, and medications
# mirrors frontend types/patient.ts MoodCheckin, Note and services/medication.ts Medication

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class MoodCheckin(BaseModel):
    id: str
    timestamp: datetime
    mood: str
    symptoms: list[str] = Field(default_factory=list)
    notes: Optional[str] = None


class Note(BaseModel):
    """clinician note; updated_at equals created_at until the note is edited"""
    id: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    title: str
    content: str

    model_config = {"populate_by_name": True}


class NoteCreate(BaseModel):
    """payload for a new clinician note; emptiness is checked by the profile view"""
    title: str = ""
    content: str = ""


class Medication(BaseModel):
    id: str
    patient_id: str = Field(..., alias="patientId")
    name: str
    dosage: str
    schedule: str
    reminders_enabled: bool = Field(False, alias="remindersEnabled")
    added_at: datetime = Field(..., alias="addedAt")

    model_config = {"populate_by_name": True}


class MedicationCreate(BaseModel):
    """payload for prescribing a medication; id, patient and date are assigned server side"""
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    schedule: str = Field(..., min_length=1, description="e.g. Morning, Night")
    reminders_enabled: bool = Field(False, alias="remindersEnabled")

    model_config = {"populate_by_name": True}
