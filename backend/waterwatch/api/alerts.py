from typing import List

from fastapi import APIRouter, Depends

from ..models.user import User
from ..schemas.common import AlertOut, AlertResolveOut
from ..services.alerts import AlertService
from .deps import get_alert_service, get_current_user
from .errors import unwrap

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("/user/{user_id}", response_model=List[AlertOut])
def user_alerts(
    user_id: int,
    _user: User = Depends(get_current_user),
    service: AlertService = Depends(get_alert_service),
):
    return unwrap(service.list_for_user(user_id))


@router.patch("/resolve/{alert_id}", response_model=AlertResolveOut)
def resolve_alert(
    alert_id: int,
    _user: User = Depends(get_current_user),
    service: AlertService = Depends(get_alert_service),
):
    alert = unwrap(service.resolve(alert_id))
    return AlertResolveOut(alert=AlertOut.model_validate(alert))
