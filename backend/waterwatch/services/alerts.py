import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..models.alert import Alert, AlertStatus
from ..models.reading import Reading
from ..models.sensor import Sensor
from .results import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)


class AlertService:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list_for_user(self, user_id: int) -> ServiceResult[List[Alert]]:
        """Alerts raised by any sensor the user owns, newest first."""
        db = self._session_factory()
        try:
            q = (
                db.query(Alert)
                .join(Reading, Alert.reading_id == Reading.id)
                .join(Sensor, Reading.sensor_id == Sensor.id)
                .filter(Sensor.user_id == user_id)
                .order_by(Alert.created_at.desc(), Alert.id.desc())
            )
            return ServiceResult.success(q.all())
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch alerts", extra={"user_id": user_id})
            return ServiceResult.failure(ErrorKind.UNEXPECTED, "Error fetching alerts", str(exc))
        finally:
            db.close()

    def resolve(self, alert_id: int) -> ServiceResult[Alert]:
        """Move an open alert to resolved.

        The status check and the write are one conditional UPDATE, so two
        concurrent calls cannot both succeed.
        """
        db = self._session_factory()
        try:
            result = db.execute(
                update(Alert)
                .where(Alert.id == alert_id, Alert.status == AlertStatus.open)
                .values(status=AlertStatus.resolved, resolved_at=datetime.now(timezone.utc).replace(tzinfo=None))
            )
            db.commit()

            alert = db.get(Alert, alert_id)
            if alert is None:
                return ServiceResult.failure(ErrorKind.NOT_FOUND, "Alert not found")
            if result.rowcount == 0:
                logger.warning("Alert already resolved", extra={"alert_id": alert_id})
                return ServiceResult.failure(ErrorKind.INVALID_STATE, "Alert already resolved")

            logger.info("Alert resolved", extra={"alert_id": alert_id, "status": alert.status.value})
            return ServiceResult.success(alert)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to resolve alert", extra={"alert_id": alert_id})
            return ServiceResult.failure(ErrorKind.UNEXPECTED, "Error resolving alert", str(exc))
        finally:
            db.close()
