# insight service: langchain-powered patient summary for the clinician
# condenses the profile into five short summaries and asks gemini for 2-3 sentences
#
# flow:
#   1. resolve the patient profile from the mock store
#   2. summarise mood, wearable, medication, notes, and history data
#   3. run the fixed-template prompt once (no retry, no caching)
#   4. return the model's text as the insight

import logging
from statistics import mean
from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import StrOutputParser

from mediview.config import settings
from mediview.errors import EmptyInsightResponseError, InsightServiceError, PatientNotFoundError
from mediview.models.insight import InsightResponse, InsightSummaries
from mediview.models.patient import PatientProfile
from mediview.services.store import MockStore

logger = logging.getLogger(__name__)

RECENT_MOODS = 3
WEARABLE_WINDOW_DAYS = 7
RECENT_NOTES = 2
RECENT_EVENTS = 3
EVENT_DESCRIPTION_CHARS = 30


def get_llm() -> ChatGoogleGenerativeAI:
    """create a gemini llm instance for insight generation"""
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=settings.INSIGHT_TEMPERATURE,
        max_output_tokens=settings.INSIGHT_MAX_OUTPUT_TOKENS,
    )


INSIGHT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", """You are an AI assistant helping a doctor review patient data to quickly spot possible problems or areas that need attention.

YOUR JOB:
- Highlight concerning trends and notable correlations (for example, low mood alongside poor sleep)
- Suggest topics for discussion or possible treatment adjustments
- Keep it to 2-3 concise sentences

DO NOT give diagnoses or direct medical advice. Focus on presenting the data in a way that is useful to the doctor."""),
    ("human", """Patient: {patient_name}

Patient data summary:
- Recent mood: {mood_data_summary}
- Recent wearable data: {wearable_data_summary}
- Medications and adherence: {medication_data_summary}
- Recent clinical notes: {notes_summary}
- Recent treatment history: {treatment_history_summary}

Concise insights for the doctor:"""),
])

_chain = None


def get_insight_chain():
    """get or create the insight generation chain"""
    global _chain
    if _chain is None:
        llm = get_llm()
        _chain = INSIGHT_PROMPT | llm | StrOutputParser()
    return _chain


# summaries

def _average(values: list) -> Optional[int]:
    present = [v for v in values if v is not None]
    return round(mean(present)) if present else None


def summarize_mood(profile: PatientProfile) -> str:
    recent = ", ".join(
        f"{m.mood} ({m.timestamp.strftime('%d/%m')})"
        for m in profile.mood_checkins[:RECENT_MOODS]
    )
    return f"Last check-ins: {recent or 'none recent'}. Overall trend: {profile.mood_trend or 'stable'}."


def summarize_wearable(profile: PatientProfile) -> str:
    window = profile.wearable_data[-WEARABLE_WINDOW_DAYS:]
    avg_hr = _average([r.heart_rate_bpm for r in window])
    avg_steps = _average([r.movement_data.step_count if r.movement_data else None for r in window])
    last_sleep = window[-1].sleep_data if window else None

    hr_text = f"{avg_hr} bpm" if avg_hr is not None else "N/A"
    sleep_text = f"{last_sleep.duration_hours}h ({last_sleep.quality})" if last_sleep else "N/A"
    steps_text = str(avg_steps) if avg_steps is not None else "N/A"
    return f"Avg HR (7d): {hr_text}. Last sleep: {sleep_text}. Avg steps (7d): {steps_text}."


def summarize_medications(profile: PatientProfile) -> str:
    meds = ", ".join(f"{m.name} ({m.dosage})" for m in profile.medications) or "No current medications"
    adherence = f"{profile.medication_adherence}%" if profile.medication_adherence is not None else "N/A"
    return f"{meds}. Reported overall adherence: {adherence}."


def summarize_notes(profile: PatientProfile) -> str:
    titles = "; ".join(n.title for n in profile.notes[:RECENT_NOTES])
    return titles or "No recent notes."


def summarize_history(profile: PatientProfile) -> str:
    recent = "; ".join(
        f"{e.type}: {e.description[:EVENT_DESCRIPTION_CHARS]}..."
        for e in profile.treatment_history[:RECENT_EVENTS]
    )
    return recent or "No recent events."


def build_insight_summaries(profile: PatientProfile) -> InsightSummaries:
    return InsightSummaries(
        patient_name=profile.name,
        mood_data_summary=summarize_mood(profile),
        wearable_data_summary=summarize_wearable(profile),
        medication_data_summary=summarize_medications(profile),
        notes_summary=summarize_notes(profile),
        treatment_history_summary=summarize_history(profile),
    )


async def generate_insights(store: MockStore, patient_id: str) -> InsightResponse:
    """generate a short ai summary for one patient; does not modify the profile"""
    profile = store.get_patient_profile(patient_id)
    if profile is None:
        raise PatientNotFoundError(patient_id)

    summaries = build_insight_summaries(profile)

    try:
        chain = get_insight_chain()
        result = await chain.ainvoke(summaries.model_dump())
    except Exception as e:
        logger.error(f"Insight generation failed for patient {patient_id}: {e}")
        raise InsightServiceError(e) from e

    insights = result.strip() if isinstance(result, str) else ""
    if not insights:
        logger.warning(f"Empty insight response for patient {patient_id}")
        raise EmptyInsightResponseError()

    logger.info(f"Insights generated for patient {patient_id}")
    return InsightResponse(insights=insights)
