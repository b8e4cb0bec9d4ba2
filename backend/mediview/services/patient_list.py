# patient list state: search, mood/adherence filters, and column sorting
# filters are ANDed over the full collection, then the filtered list is sorted

from datetime import datetime
from typing import Literal, Optional

from mediview.models.dashboard import AdherenceBucket
from mediview.models.patient import PatientSummary
from mediview.services.aggregation import adherence_bucket

SortDirection = Literal["asc", "desc"]

SORT_KEYS = (
    "id",
    "name",
    "last_mood",
    "mood_trend",
    "recent_activity",
    "medication_adherence",
    "last_checkin",
)

# camelCase column names accepted from the frontend
SORT_KEY_ALIASES = {
    "lastMood": "last_mood",
    "moodTrend": "mood_trend",
    "recentActivity": "recent_activity",
    "medicationAdherence": "medication_adherence",
    "lastCheckin": "last_checkin",
}


def resolve_sort_key(key: str) -> str:
    key = SORT_KEY_ALIASES.get(key, key)
    if key not in SORT_KEYS:
        raise ValueError(f"Cannot sort patients by {key}")
    return key


def _sort_value(value):
    """comparable value by type: strings casefolded, numbers as-is, dates by epoch"""
    if isinstance(value, str):
        return (2, value.casefold())
    if isinstance(value, datetime):
        return (1, value.timestamp())
    if isinstance(value, (int, float)):
        return (0, value)
    return (3, str(value).lower())


def matches_search(patient: PatientSummary, search: str) -> bool:
    term = search.strip().lower()
    if not term:
        return True
    return term in patient.name.lower() or term in patient.id.lower()


def filter_patients(
    patients: list[PatientSummary],
    search: str = "",
    moods: Optional[set[str]] = None,
    adherence: Optional[AdherenceBucket] = None,
) -> list[PatientSummary]:
    result = [p for p in patients if matches_search(p, search)]
    if moods:
        result = [p for p in result if p.last_mood in moods]
    if adherence:
        result = [p for p in result if adherence_bucket(p.medication_adherence) == adherence]
    return result


def sort_patients(
    patients: list[PatientSummary],
    key: str,
    direction: SortDirection = "asc",
) -> list[PatientSummary]:
    """stable sort on one column; missing values always go last"""
    key = resolve_sort_key(key)
    present = [p for p in patients if getattr(p, key) is not None]
    missing = [p for p in patients if getattr(p, key) is None]
    ordered = sorted(
        present,
        key=lambda p: _sort_value(getattr(p, key)),
        reverse=direction == "desc",
    )
    return ordered + missing


class PatientListController:
    """list view state over a patient collection"""

    def __init__(self, patients: list[PatientSummary]):
        self.patients = list(patients)
        self.search = ""
        self.mood_filter: set[str] = set()
        self.adherence_filter: Optional[AdherenceBucket] = None
        self.sort_key: Optional[str] = None
        self.sort_direction: SortDirection = "asc"

    def set_search(self, search: str):
        self.search = search

    def toggle_mood(self, mood: str):
        if mood in self.mood_filter:
            self.mood_filter.discard(mood)
        else:
            self.mood_filter.add(mood)

    def set_mood_filter(self, moods: set[str]):
        self.mood_filter = set(moods)

    def set_adherence_filter(self, bucket: Optional[AdherenceBucket]):
        self.adherence_filter = bucket

    def request_sort(self, key: str):
        """clicking the active column flips direction, a new column starts ascending"""
        key = resolve_sort_key(key)
        if self.sort_key == key:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_key = key
            self.sort_direction = "asc"

    def set_sort(self, key: Optional[str], direction: SortDirection = "asc"):
        self.sort_key = resolve_sort_key(key) if key else None
        self.sort_direction = direction

    def visible(self) -> list[PatientSummary]:
        result = filter_patients(
            self.patients,
            search=self.search,
            moods=self.mood_filter,
            adherence=self.adherence_filter,
        )
        if self.sort_key is not None:
            result = sort_patients(result, self.sort_key, self.sort_direction)
        return result
