# chart-ready aggregates for the dashboard and the wearable tab
# pure functions: missing fields land in an "unknown"/"other" bucket instead of failing

from typing import Iterable, Optional

from mediview.models.dashboard import (
    AdherenceBucket,
    AdherenceDistributionEntry,
    DashboardStats,
    MoodDistributionEntry,
)
from mediview.models.patient import PatientSummary
from mediview.models.wearable import WearableReading

OTHER_MOOD = "Other"

MOOD_COLORS = {
    "Happy": "hsl(var(--chart-1))",
    "Calm": "hsl(var(--chart-2))",
    "Anxious": "hsl(var(--chart-3))",
    "Sad": "hsl(var(--chart-4))",
    "Irritable": "hsl(var(--chart-5))",
    "Stressed": "hsl(var(--chart-1))",
    OTHER_MOOD: "hsl(var(--muted))",
}

# bucket -> (display label, color), in display order
ADHERENCE_BUCKETS: dict[str, tuple[str, str]] = {
    "low": ("Low (<70%)", "hsl(var(--destructive))"),
    "medium": ("Medium (70-89%)", "hsl(var(--chart-3))"),
    "high": ("High (≥90%)", "hsl(var(--chart-1))"),
    "unknown": ("N/A", "hsl(var(--muted))"),
}

LOW_ADHERENCE_THRESHOLD = 70
HIGH_ADHERENCE_THRESHOLD = 90

# chart column -> reading accessor
WEARABLE_METRICS = {
    "heartRate": lambda r: r.heart_rate_bpm,
    "hrv": lambda r: r.heart_rate_variability_ms,
    "eda": lambda r: r.eda_microsiemens,
    "temperature": lambda r: r.body_temperature_celsius,
    "steps": lambda r: r.movement_data.step_count if r.movement_data else None,
    "sleep": lambda r: r.sleep_data.duration_hours if r.sleep_data else None,
}

DEFAULT_CHART_POINTS = 15


def adherence_bucket(adherence: Optional[float]) -> AdherenceBucket:
    if adherence is None:
        return "unknown"
    if adherence < LOW_ADHERENCE_THRESHOLD:
        return "low"
    if adherence < HIGH_ADHERENCE_THRESHOLD:
        return "medium"
    return "high"


def mood_distribution(patients: Iterable[PatientSummary]) -> list[MoodDistributionEntry]:
    """count patients by last mood, in order of first appearance"""
    counts: dict[str, int] = {}
    for patient in patients:
        mood = patient.last_mood or OTHER_MOOD
        counts[mood] = counts.get(mood, 0) + 1

    return [
        MoodDistributionEntry(
            mood=mood,
            count=count,
            fill=MOOD_COLORS.get(mood, MOOD_COLORS[OTHER_MOOD]),
        )
        for mood, count in counts.items()
    ]


def adherence_distribution(patients: Iterable[PatientSummary]) -> list[AdherenceDistributionEntry]:
    """count patients per adherence bucket, skipping empty buckets"""
    counts = {bucket: 0 for bucket in ADHERENCE_BUCKETS}
    for patient in patients:
        counts[adherence_bucket(patient.medication_adherence)] += 1

    entries = []
    for bucket, (label, color) in ADHERENCE_BUCKETS.items():
        if counts[bucket]:
            entries.append(AdherenceDistributionEntry(
                bucket=bucket,
                level=label,
                count=counts[bucket],
                fill=color,
            ))
    return entries


def wearable_chart_series(
    readings: list[WearableReading],
    points: int = DEFAULT_CHART_POINTS,
    metrics: Optional[list[str]] = None,
) -> list[dict]:
    """flatten the most recent readings into one chart row per day.
    missing metric values stay None rather than becoming zero."""
    if metrics is None:
        metrics = list(WEARABLE_METRICS)
    unknown = [m for m in metrics if m not in WEARABLE_METRICS]
    if unknown:
        raise ValueError(f"Unknown wearable metrics: {', '.join(unknown)}")

    recent = readings[-points:] if points > 0 else []
    rows = []
    for reading in recent:
        row: dict = {"name": reading.timestamp.strftime("%d/%m")}
        for metric in metrics:
            row[metric] = WEARABLE_METRICS[metric](reading)
        rows.append(row)
    return rows


def dashboard_stats(patients: list[PatientSummary], recent_limit: int = 5) -> DashboardStats:
    # patients without an adherence figure are not flagged
    low_adherence = sum(
        1 for p in patients
        if (p.medication_adherence if p.medication_adherence is not None else 100) < LOW_ADHERENCE_THRESHOLD
    )
    declining = sum(1 for p in patients if p.mood_trend == "down")

    return DashboardStats(
        total_patients=len(patients),
        low_adherence_patients=low_adherence,
        declining_mood_patients=declining,
        recent_patients=patients[:recent_limit],
    )
