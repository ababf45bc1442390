from __future__ import annotations

from typing import Any, Mapping

from flask import abort, current_app, g, request

from powertrack.errors import ValidationError

USER_HEADER = "X-User-Id"


def load_user() -> None:
    """
    before_request hook: the authenticated user id is supplied by the
    fronting auth layer in a header. No header -> 401.
    """
    user_id = (request.headers.get(USER_HEADER) or "").strip()
    if not user_id:
        abort(401, description=f"{USER_HEADER} header is required")
    g.user_id = user_id


def form_data() -> Mapping[str, Any]:
    """
    Request body als Mapping: JSON-Objekt oder klassisches Formular.
    Any other JSON value (list, string, number, null) is rejected.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, Mapping):
            raise ValidationError({"body": "expected an object"})
        return data
    return request.form


def now():
    """Reference instant from the configured clock."""
    return current_app.config["CLOCK"]()
