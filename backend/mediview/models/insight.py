# insight models: ai summary request, response, and the prompt inputs

from pydantic import BaseModel, Field


class InsightRequest(BaseModel):
    patient_id: str = Field(..., min_length=1, alias="patientId")

    model_config = {"populate_by_name": True}


class InsightResponse(BaseModel):
    insights: str


class InsightSummaries(BaseModel):
    """the five short summaries fed into the insight prompt"""
    patient_name: str = Field(..., alias="patientName")
    mood_data_summary: str = Field(..., alias="moodDataSummary")
    wearable_data_summary: str = Field(..., alias="wearableDataSummary")
    medication_data_summary: str = Field(..., alias="medicationDataSummary")
    notes_summary: str = Field(..., alias="notesSummary")
    treatment_history_summary: str = Field(..., alias="treatmentHistorySummary")

    model_config = {"populate_by_name": True}
