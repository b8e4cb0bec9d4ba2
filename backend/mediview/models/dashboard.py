# dashboard models: stats cards and chart-ready distributions
# mirrors frontend dashboard-page.tsx moodChartData, adherenceChartData

from typing import Literal
from pydantic import BaseModel, Field

from mediview.models.patient import PatientSummary


AdherenceBucket = Literal["low", "medium", "high", "unknown"]


class DashboardStats(BaseModel):
    """aggregate stats for the clinician dashboard overview"""
    total_patients: int = Field(0, alias="totalPatients")
    low_adherence_patients: int = Field(0, alias="lowAdherencePatients")
    declining_mood_patients: int = Field(0, alias="decliningMoodPatients")
    recent_patients: list[PatientSummary] = Field(default_factory=list, alias="recentPatients")

    model_config = {"populate_by_name": True}


class MoodDistributionEntry(BaseModel):
    mood: str
    count: int
    fill: str


class AdherenceDistributionEntry(BaseModel):
    bucket: AdherenceBucket
    level: str
    count: int
    fill: str
