# patient profile view state: tab selection, note authoring, and the realtime stream
# works on an already-loaded profile; switching tabs never refetches

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from mediview.config import settings
from mediview.errors import NoteValidationError
from mediview.models.clinical import Note
from mediview.models.patient import PatientProfile, PatientSummary
from mediview.models.treatment import NoteEvent
from mediview.services.aggregation import wearable_chart_series
from mediview.services.generators import newest_first
from mediview.services.ids import IdGenerator
from mediview.services.realtime import RealtimeStream, UpdateCallback, snapshot_from_reading
from mediview.services.store import insert_event

logger = logging.getLogger(__name__)

RECENT_CHECKINS_ON_OVERVIEW = 5


class ProfileTab(str, Enum):
    OVERVIEW = "overview"
    WEARABLE = "wearable"
    MEDICATIONS = "medications"
    NOTES = "notes"
    HISTORY = "history"


@dataclass
class NoteDraft:
    title: str = ""
    content: str = ""


def commit_note(
    profile: PatientProfile,
    title: str,
    content: str,
    ids: IdGenerator,
    now: Optional[datetime] = None,
) -> Note:
    """prepend a note and its mirrored history event, keeping both newest first"""
    now = now or datetime.now(timezone.utc)
    note = Note(
        id=ids.next_id("note"),
        created_at=now,
        updated_at=now,
        title=title,
        content=content,
    )
    event = NoteEvent(
        id=f"evt_note_{note.id}",
        timestamp=note.created_at,
        description=f"Note added: {note.title}",
        details=note,
    )
    profile.notes = newest_first([note, *profile.notes], key=lambda n: n.created_at)
    insert_event(profile, event)
    return note


class ProfileView:
    """ui state for one open patient profile"""

    def __init__(
        self,
        profile: PatientProfile,
        ids: IdGenerator,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.profile = profile
        self.ids = ids
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.active_tab = ProfileTab.OVERVIEW
        self.draft: Optional[NoteDraft] = None
        self.stream: Optional[RealtimeStream] = None

    # tabs

    def select_tab(self, tab) -> ProfileTab:
        self.active_tab = ProfileTab(tab)
        return self.active_tab

    def section(self) -> dict:
        """data shown on the active tab"""
        profile = self.profile
        if self.active_tab == ProfileTab.OVERVIEW:
            return {
                "summary": PatientSummary.model_validate(profile.model_dump(include=set(PatientSummary.model_fields))),
                "dateJoined": profile.date_joined,
                "aiInsights": profile.ai_insights,
                "latestReading": profile.wearable_data[-1] if profile.wearable_data else None,
                "recentCheckins": profile.mood_checkins[:RECENT_CHECKINS_ON_OVERVIEW],
            }
        if self.active_tab == ProfileTab.WEARABLE:
            return {
                "readings": profile.wearable_data,
                "chart": wearable_chart_series(profile.wearable_data, settings.WEARABLE_CHART_POINTS),
            }
        if self.active_tab == ProfileTab.MEDICATIONS:
            return {"medications": profile.medications}
        if self.active_tab == ProfileTab.NOTES:
            return {"notes": profile.notes}
        return {"treatmentHistory": profile.treatment_history}

    # note authoring

    def begin_note(self) -> NoteDraft:
        self.draft = NoteDraft()
        return self.draft

    def update_draft(self, title: Optional[str] = None, content: Optional[str] = None) -> NoteDraft:
        if self.draft is None:
            self.begin_note()
        if title is not None:
            self.draft.title = title
        if content is not None:
            self.draft.content = content
        return self.draft

    def cancel_note(self):
        self.draft = None

    def submit_note(self) -> Note:
        """commit the draft; a blank title or content keeps the draft and raises"""
        draft = self.draft or NoteDraft()
        if not draft.title.strip() or not draft.content.strip():
            raise NoteValidationError()

        note = commit_note(self.profile, draft.title, draft.content, self.ids, self.clock())
        self.draft = None
        logger.info(f"Note {note.id} added for patient {self.profile.id}")
        return note

    # realtime stream

    def start_stream(
        self,
        on_update: UpdateCallback,
        interval: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> RealtimeStream:
        """start the simulated biofeedback stream from the last wearable reading"""
        if self.stream is not None and self.stream.running:
            return self.stream
        last_reading = self.profile.wearable_data[-1] if self.profile.wearable_data else None
        self.stream = RealtimeStream(
            snapshot_from_reading(last_reading),
            on_update,
            interval if interval is not None else settings.REALTIME_INTERVAL_SECONDS,
            rng,
        ).start()
        return self.stream

    async def close(self):
        """view teardown; stops the stream so it never updates a closed view"""
        if self.stream is not None:
            await self.stream.cancel()
            self.stream = None
