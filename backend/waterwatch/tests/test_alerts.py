from datetime import datetime, timedelta

from waterwatch.core.security import create_access_token
from waterwatch.models.alert import Alert, AlertStatus, Severity
from waterwatch.models.reading import Reading


def _add_alert(session_factory, sensor_id, created_at, status=AlertStatus.open):
    db = session_factory()
    try:
        reading = Reading(sensor_id=sensor_id, ph=9.0, turbidity=10.0, temperature=20.0,
                          tds=200.0, dissolved_oxygen=6.0)
        db.add(reading)
        db.flush()
        alert = Alert(reading_id=reading.id, severity=Severity.WARNING, message="m",
                      status=status, created_at=created_at)
        db.add(alert)
        db.commit()
        return alert.id
    finally:
        db.close()


def test_user_alerts_newest_first(client, owner, other_owner, auth_headers, session_factory):
    now = datetime.utcnow()
    oldest = _add_alert(session_factory, owner["sensor_id"], now - timedelta(hours=2))
    newest = _add_alert(session_factory, owner["sensor_id"], now)
    middle = _add_alert(session_factory, owner["sensor_id"], now - timedelta(hours=1))
    _add_alert(session_factory, other_owner["sensor_id"], now + timedelta(hours=1))

    r = client.get(f"/alerts/user/{owner['user_id']}", headers=auth_headers)
    assert r.status_code == 200
    assert [a["id"] for a in r.json()] == [newest, middle, oldest]


def test_user_without_alerts_gets_empty_list(client, owner, auth_headers):
    r = client.get("/alerts/user/9999", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == []


def test_alerts_require_bearer_token(client, owner):
    assert client.get(f"/alerts/user/{owner['user_id']}").status_code == 401
    assert client.patch("/alerts/resolve/1").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get(f"/alerts/user/{owner['user_id']}", headers=bad).status_code == 401


def test_resolve_missing_alert(client, auth_headers):
    r = client.patch("/alerts/resolve/424242", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Alert not found"


def test_resolve_twice(client, owner, auth_headers, session_factory):
    alert_id = _add_alert(session_factory, owner["sensor_id"], datetime.utcnow())

    first = client.patch(f"/alerts/resolve/{alert_id}", headers=auth_headers)
    assert first.status_code == 200
    body = first.json()
    assert body["message"] == "Alert resolved successfully"
    assert body["alert"]["status"] == "resolved"
    assert body["alert"]["resolved_at"] is not None

    db = session_factory()
    try:
        resolved_at = db.get(Alert, alert_id).resolved_at
    finally:
        db.close()

    second = client.patch(f"/alerts/resolve/{alert_id}", headers=auth_headers)
    assert second.status_code == 400
    assert second.json()["detail"] == "Alert already resolved"

    db = session_factory()
    try:
        alert = db.get(Alert, alert_id)
        assert alert.status == AlertStatus.resolved
        assert alert.resolved_at == resolved_at
    finally:
        db.close()


def test_ingest_then_resolve(client, owner, auth_headers):
    r = client.post(
        "/readings/upload",
        json={"api_key": owner["api_key"], "ph": 9.2, "turbidity": 3, "temperature": 18,
              "tds": 120, "dissolved_oxygen": 7.5},
        headers=auth_headers,
    )
    alert_id = r.json()["alert"]["id"]

    listed = client.get(f"/alerts/user/{owner['user_id']}", headers=auth_headers).json()
    assert [a["id"] for a in listed] == [alert_id]

    assert client.patch(f"/alerts/resolve/{alert_id}", headers=auth_headers).status_code == 200
    listed = client.get(f"/alerts/user/{owner['user_id']}", headers=auth_headers).json()
    assert listed[0]["status"] == "resolved"


def test_expired_token_is_rejected(client, owner, settings):
    token = create_access_token(sub=str(owner["user_id"]), settings=settings, minutes=-1)
    r = client.get(f"/alerts/user/{owner['user_id']}", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_for_unknown_user_is_rejected(client, owner, settings):
    token = create_access_token(sub="99999", settings=settings)
    r = client.patch("/alerts/resolve/1", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
