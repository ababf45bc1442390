from __future__ import annotations

from flask import Blueprint, abort, current_app, g, request

from powertrack.db import get_db
from powertrack.models.completed import (
    apply_action,
    find_completed_workout,
    get_completed_workout,
)
from powertrack.models.records import MetricsUpdate, WorkoutKey
from powertrack.services.form_parser import parse_date, parse_day, parse_metrics_form
from powertrack.services.reconciler import changed_fields, reconcile

from . import form_data, load_user, now

bp = Blueprint("metrics", __name__, url_prefix="/metrics")
bp.before_request(load_user)


def _key(day: str) -> WorkoutKey:
    today = now().date()
    return WorkoutKey(
        user_id=g.user_id,
        day=parse_day(day),
        date=parse_date(request.args.get("date"), default=today),
    )


def _save(key: WorkoutKey, incoming: MetricsUpdate):
    """Look up, reconcile, apply. Returns the JSON response body."""
    db = get_db()
    existing = find_completed_workout(db, key)
    action = reconcile(key, incoming, existing)
    record_id = apply_action(db, action)

    current_app.logger.info(
        "completed workout %s %s (user=%s day=%s date=%s fields=%s)",
        record_id,
        action.kind,
        key.user_id,
        key.day,
        key.date.isoformat(),
        ",".join(changed_fields(action, existing)) or "-",
    )
    record = get_completed_workout(db, record_id)
    return {"action": action.kind, "record": record.to_dict()}


@bp.get("/<day>")
def show(day: str):
    """Stored metrics for (user, day, ?date=YYYY-MM-DD, default today)."""
    record = find_completed_workout(get_db(), _key(day))
    if record is None:
        abort(404, description="No metrics recorded for this day")
    return record.to_dict()


@bp.post("/<day>")
def save(day: str):
    """Create or merge the day's metrics; fields left blank keep stored values."""
    key = _key(day)
    incoming = parse_metrics_form(form_data())
    body = _save(key, incoming)
    return body, (201 if body["action"] == "created" else 200)


@bp.post("/<day>/complete")
def complete(day: str):
    """Mark the day's workout completed; existing metrics are untouched."""
    key = _key(day)
    body = _save(key, MetricsUpdate())
    return body, (201 if body["action"] == "created" else 200)
