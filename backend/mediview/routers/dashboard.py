# dashboard router: overview stats cards and the two distribution charts
# everything is computed from the session's patient summaries on each request

import logging

from fastapi import APIRouter, Depends, Query

from mediview.models.dashboard import AdherenceDistributionEntry, DashboardStats, MoodDistributionEntry
from mediview.services.aggregation import adherence_distribution, dashboard_stats, mood_distribution
from mediview.services.store import MockStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    recent: int = Query(5, ge=0, le=50, description="number of patients in the recent list"),
    store: MockStore = Depends(get_store),
):
    """get aggregate dashboard statistics for the clinician"""
    patients = store.list_patient_summaries()
    stats = dashboard_stats(patients, recent_limit=recent)
    logger.info(
        f"Dashboard stats: {stats.total_patients} patients, "
        f"{stats.low_adherence_patients} low adherence, {stats.declining_mood_patients} declining"
    )
    return stats


@router.get("/mood-distribution", response_model=list[MoodDistributionEntry])
async def get_mood_distribution(store: MockStore = Depends(get_store)):
    """patients per last recorded mood"""
    return mood_distribution(store.list_patient_summaries())


@router.get("/adherence-distribution", response_model=list[AdherenceDistributionEntry])
async def get_adherence_distribution(store: MockStore = Depends(get_store)):
    return adherence_distribution(store.list_patient_summaries())
