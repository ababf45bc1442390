# powertrack/blueprints/progress.py
from __future__ import annotations

import io
from typing import List, Tuple
from datetime import date

from flask import Blueprint, Response, current_app, g, request

# Matplotlib im Headless-Mode
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from powertrack.db import get_db
from powertrack.models.completed import list_completed_workouts
from powertrack.models.records import CompletedWorkout
from powertrack.services.progress import aggregate

from . import load_user, now

bp = Blueprint("progress", __name__, url_prefix="/progress")
bp.before_request(load_user)


# ---------------------------
# Hilfsfunktionen
# ---------------------------

def _weight_history(records: List[CompletedWorkout]) -> List[Tuple[date, float]]:
    """(date, weight) pairs, oldest first; records without a weight are skipped."""
    return [(r.date, float(r.weight)) for r in records if r.weight is not None]


# ---------------------------
# JSON
# ---------------------------

@bp.get("")
def summary():
    """Weekly summary: completion count, goal %, averages, latest weight."""
    records = list_completed_workouts(get_db(), g.user_id)
    result = aggregate(
        records,
        now(),
        goal=current_app.config["WEEKLY_GOAL"],
        window_days=current_app.config["WINDOW_DAYS"],
    )
    return result.to_dict()


@bp.get("/completed")
def completed():
    records = list_completed_workouts(get_db(), g.user_id)
    return {"completed": [r.to_dict() for r in records]}


# ---------------------------
# PNG
# ---------------------------

@bp.get("/weight.png")
def weight_png():
    """
    Line chart of body weight over time (all recorded dates).
    Optional: ?download=1 sets the attachment header.
    """
    history = _weight_history(list_completed_workouts(get_db(), g.user_id))
    dates = [d for d, _ in history]
    weights = [w for _, w in history]

    fig, ax = plt.subplots(figsize=(7.5, 3.2), dpi=140)

    if weights:
        ax.plot(dates, weights, marker="o", linewidth=2)
    else:
        ax.text(
            0.5, 0.5,
            "No data yet",
            ha="center", va="center", transform=ax.transAxes
        )

    ax.set_title("Body weight over time")
    ax.set_ylabel("Weight (kg)")
    ax.set_xlabel("Date")
    ax.grid(True, linestyle=":", alpha=0.4)
    fig.autofmt_xdate()
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)

    download = request.args.get("download", type=int) == 1
    headers = {}
    if download:
        safe_user = g.user_id.replace('"', "'")
        headers["Content-Disposition"] = f'attachment; filename="weight_{safe_user}.png"'
    return Response(buf.getvalue(), mimetype="image/png", headers=headers)
