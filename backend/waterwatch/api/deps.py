from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.security import decode_access_token
from ..models.user import User
from ..services.alerts import AlertService
from ..services.readings import ReadingService

bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_db(request: Request):
    db = request.app.state.session_factory()
    try: yield db
    finally: db.close()

def get_reading_service(request: Request) -> ReadingService:
    return request.app.state.reading_service

def get_alert_service(request: Request) -> AlertService:
    return request.app.state.alert_service


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> User:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized
    sub = decode_access_token(credentials.credentials, settings)
    if sub is None or not sub.isdigit():
        raise unauthorized
    user = db.get(User, int(sub))
    if user is None:
        raise unauthorized
    return user
