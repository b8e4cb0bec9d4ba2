# patients router: list, profile tabs, medications, wearables, notes, history
# plus the simulated realtime biofeedback websocket

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from mediview.errors import NoteValidationError
from mediview.models.clinical import Medication, MedicationCreate, Note, NoteCreate
from mediview.models.dashboard import AdherenceBucket
from mediview.models.patient import PatientProfile, PatientSummary
from mediview.models.treatment import EventType, TreatmentEvent
from mediview.models.wearable import WearableReading
from mediview.services.aggregation import wearable_chart_series
from mediview.services.patient_list import PatientListController, SortDirection
from mediview.services.profile_view import ProfileTab, ProfileView
from mediview.services.realtime import RealtimeSnapshot, streams
from mediview.services.store import MockStore, get_store
from mediview.config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/patients", tags=["patients"])


def _require_profile(patient_id: str, store: MockStore) -> PatientProfile:
    profile = store.get_patient_profile(patient_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found",
        )
    return profile


@router.get("", response_model=list[PatientSummary])
async def list_patients(
    search: str = Query("", description="case-insensitive match on name or id"),
    mood: Optional[list[str]] = Query(None, description="keep patients whose last mood is any of these"),
    adherence: Optional[AdherenceBucket] = Query(None, description="low | medium | high | unknown"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    direction: SortDirection = Query("asc"),
    store: MockStore = Depends(get_store),
):
    """list patient summaries with search, filters, and column sorting"""
    controller = PatientListController(store.list_patient_summaries())
    controller.set_search(search)
    controller.set_mood_filter(set(mood or []))
    controller.set_adherence_filter(adherence)

    try:
        controller.set_sort(sort_by, direction)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return controller.visible()


@router.get("/{patient_id}", response_model=PatientProfile)
async def get_patient(
    patient_id: str,
    store: MockStore = Depends(get_store),
):
    """full profile for one patient"""
    return _require_profile(patient_id, store)


@router.get("/{patient_id}/tabs/{tab}")
async def get_profile_tab(
    patient_id: str,
    tab: ProfileTab,
    store: MockStore = Depends(get_store),
):
    """data for a single profile tab"""
    view = ProfileView(_require_profile(patient_id, store), store.ids, store.clock)
    view.select_tab(tab)
    return {"tab": view.active_tab.value, **view.section()}


@router.get("/{patient_id}/medications", response_model=list[Medication])
async def list_medications(
    patient_id: str,
    store: MockStore = Depends(get_store),
):
    return _require_profile(patient_id, store).medications


@router.post("/{patient_id}/medications", response_model=Medication, status_code=status.HTTP_201_CREATED)
async def add_medication(
    patient_id: str,
    body: MedicationCreate,
    store: MockStore = Depends(get_store),
):
    """prescribe a new medication for the patient"""
    _require_profile(patient_id, store)
    return store.add_medication(patient_id, body)


@router.get("/{patient_id}/wearables", response_model=list[WearableReading])
async def list_wearable_readings(
    patient_id: str,
    store: MockStore = Depends(get_store),
):
    """daily wearable readings, oldest first"""
    _require_profile(patient_id, store)
    return store.list_wearable_readings(patient_id)


@router.get("/{patient_id}/wearables/chart")
async def get_wearable_chart(
    patient_id: str,
    metric: Optional[list[str]] = Query(None, description="heartRate | hrv | eda | temperature | steps | sleep"),
    points: int = Query(settings.WEARABLE_CHART_POINTS, ge=1, le=90),
    store: MockStore = Depends(get_store),
):
    """chart rows for the most recent readings, one per day"""
    profile = _require_profile(patient_id, store)
    try:
        return wearable_chart_series(profile.wearable_data, points=points, metrics=metric)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{patient_id}/notes", response_model=Note, status_code=status.HTTP_201_CREATED)
async def add_note(
    patient_id: str,
    body: NoteCreate,
    store: MockStore = Depends(get_store),
):
    """add a clinician note; also logged on the treatment timeline"""
    view = ProfileView(_require_profile(patient_id, store), store.ids, store.clock)
    view.begin_note()
    view.update_draft(title=body.title, content=body.content)

    try:
        return view.submit_note()
    except NoteValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)


@router.get("/{patient_id}/history", response_model=list[TreatmentEvent])
async def get_treatment_history(
    patient_id: str,
    event_type: Optional[EventType] = Query(None, alias="type"),
    include_synthetic: bool = Query(True, alias="includeSynthetic"),
    store: MockStore = Depends(get_store),
):
    """treatment timeline, newest first"""
    events = _require_profile(patient_id, store).treatment_history
    if event_type:
        events = [e for e in events if e.type == event_type]
    if not include_synthetic:
        events = [e for e in events if not e.synthetic]
    return events


@router.websocket("/{patient_id}/realtime")
async def realtime_metrics(
    websocket: WebSocket,
    patient_id: str,
    store: MockStore = Depends(get_store),
):
    """stream simulated hr / hrv / eda until the client disconnects"""
    profile = store.get_patient_profile(patient_id)
    if profile is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    view = ProfileView(profile, store.ids, store.clock)

    async def send_snapshot(snapshot: RealtimeSnapshot):
        await websocket.send_json(snapshot.to_dict())

    stream = view.start_stream(send_snapshot)
    streams.add(stream)
    logger.info(f"Realtime stream started for patient {patient_id}")

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info(f"Realtime stream client disconnected for patient {patient_id}")
    finally:
        await streams.remove(stream)
        await view.close()
