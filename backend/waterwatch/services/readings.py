import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..models.alert import Alert
from ..models.reading import Reading
from ..models.sensor import Sensor
from ..schemas.common import ReadingUpload
from .classifier import (
    Classification,
    alert_message,
    alert_severity,
    classify_dissolved_oxygen,
    classify_ph,
    classify_turbidity,
    needs_alert,
)
from .results import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)


@dataclass
class IngestOutcome:
    reading: Reading
    alert: Optional[Alert]
    ph: Classification
    turbidity: Classification
    dissolved_oxygen: Classification


class ReadingService:
    """Stores sensor readings and raises alerts for out-of-band values."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def ingest(self, payload: ReadingUpload) -> ServiceResult[IngestOutcome]:
        db = self._session_factory()
        try:
            sensor = db.query(Sensor).filter(Sensor.api_key == payload.api_key).first()
            if sensor is None:
                logger.warning("Rejected reading with unknown API key")
                return ServiceResult.failure(ErrorKind.AUTHENTICATION, "Invalid API Key")

            reading = Reading(
                sensor_id=sensor.id,
                ph=payload.ph,
                turbidity=payload.turbidity,
                temperature=payload.temperature,
                tds=payload.tds,
                dissolved_oxygen=payload.dissolved_oxygen,
            )
            db.add(reading)
            # Reading and its alert commit together
            db.flush()

            alert = None
            if needs_alert(payload.ph, payload.turbidity, payload.dissolved_oxygen):
                alert = Alert(
                    reading_id=reading.id,
                    severity=alert_severity(payload.ph, payload.turbidity),
                    message=alert_message(payload.ph, payload.turbidity),
                )
                db.add(alert)

            db.commit()
            db.refresh(reading)
            if alert is not None:
                db.refresh(alert)
                logger.warning(
                    "Alert raised for reading",
                    extra={"sensor_id": sensor.id, "reading_id": reading.id,
                           "alert_id": alert.id, "severity": alert.severity.value},
                )
            logger.info("Reading recorded", extra={"sensor_id": sensor.id, "reading_id": reading.id})

            return ServiceResult.success(IngestOutcome(
                reading=reading,
                alert=alert,
                ph=classify_ph(payload.ph),
                turbidity=classify_turbidity(payload.turbidity),
                dissolved_oxygen=classify_dissolved_oxygen(payload.dissolved_oxygen),
            ))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to record reading")
            return ServiceResult.failure(ErrorKind.UNEXPECTED, "Error", str(exc))
        finally:
            db.close()
