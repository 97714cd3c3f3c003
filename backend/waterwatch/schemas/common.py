from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional
from datetime import datetime

from ..models.alert import AlertStatus, Severity

class UserCreate(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: int
    email: EmailStr
    class Config: from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class ReadingUpload(BaseModel):
    api_key: str
    ph: float; turbidity: float; temperature: float; tds: float; dissolved_oxygen: float
    model_config = ConfigDict(allow_inf_nan=False)

class MetricResult(BaseModel):
    value: float
    band: str
    result: str

class AlertOut(BaseModel):
    id: int; reading_id: int; severity: Severity; message: str; status: AlertStatus
    resolved_at: Optional[datetime] = None
    created_at: datetime
    class Config: from_attributes = True

class ReadingUploadOut(BaseModel):
    message: str = "Data analyzed and recorded"
    reading_id: int
    alert: Optional[AlertOut] = None
    ph: MetricResult
    turbidity: MetricResult
    dissolved_oxygen: MetricResult

class AlertResolveOut(BaseModel):
    message: str = "Alert resolved successfully"
    alert: AlertOut

