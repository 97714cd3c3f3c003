from fastapi import APIRouter, Depends, status

from ..models.user import User
from ..schemas.common import AlertOut, MetricResult, ReadingUpload, ReadingUploadOut
from ..services.classifier import Classification
from ..services.readings import ReadingService
from .deps import get_current_user, get_reading_service
from .errors import unwrap

router = APIRouter(prefix="/readings", tags=["readings"])


def _metric(value: float, c: Classification) -> MetricResult:
    return MetricResult(value=value, band=c.band.value, result=c.advisory)


@router.post("/upload", response_model=ReadingUploadOut, status_code=status.HTTP_201_CREATED)
def upload(
    payload: ReadingUpload,
    _user: User = Depends(get_current_user),
    service: ReadingService = Depends(get_reading_service),
):
    outcome = unwrap(service.ingest(payload))
    return ReadingUploadOut(
        reading_id=outcome.reading.id,
        alert=AlertOut.model_validate(outcome.alert) if outcome.alert is not None else None,
        ph=_metric(payload.ph, outcome.ph),
        turbidity=_metric(payload.turbidity, outcome.turbidity),
        dissolved_oxygen=_metric(payload.dissolved_oxygen, outcome.dissolved_oxygen),
    )
