# insights router: on-demand ai summary of one patient's data
# the new insight is stored on the profile and logged on the treatment timeline

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from mediview.errors import EmptyInsightResponseError, InsightServiceError, PatientNotFoundError
from mediview.models.insight import InsightRequest, InsightResponse
from mediview.services import insight_service
from mediview.services.store import MockStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/insights", tags=["insights"])


@router.post("", response_model=InsightResponse)
async def generate_patient_insights(
    request: InsightRequest,
    store: MockStore = Depends(get_store),
):
    """generate ai insights for a patient"""
    try:
        response = await insight_service.generate_insights(store, request.patient_id)
    except PatientNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except (EmptyInsightResponseError, InsightServiceError) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    store.record_insight(request.patient_id, response.insights)
    return response
