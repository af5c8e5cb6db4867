"""Shared helpers for route blueprints."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlparse

from flask import jsonify, redirect, request, url_for
from werkzeug.datastructures import MultiDict

__all__ = ["bind_api_form", "json_error", "read_json_object", "safe_redirect"]


def safe_redirect(referrer: str | None, fallback_endpoint: str, **values):
    """Redirect to referrer when it matches the current host, otherwise fallback."""
    if not referrer:
        return redirect(url_for(fallback_endpoint, **values))
    ref_url = urlparse(request.host_url)
    test_url = urlparse(referrer)
    if test_url.scheme in ("http", "https") and ref_url.netloc == test_url.netloc:
        return redirect(referrer)
    return redirect(url_for(fallback_endpoint, **values))


def json_error(errors: Mapping[str, Any] | None = None, *, message: str | None = None, status: int = 400):
    """Return a JSON error response."""
    payload: dict[str, Any] = {}
    if message:
        payload["message"] = message
    if errors is not None:
        payload["errors"] = dict(errors)
    return jsonify(payload), status


def read_json_object() -> dict[str, Any] | None:
    """Return the request body when it is a JSON object, otherwise None."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None
    return payload


def _formdata_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    return str(value)


def bind_api_form(form_class, payload: Mapping[str, Any]):
    """Bind a JSON payload to an API form.

    ``None`` values are treated as missing so optional fields fall back to
    their defaults. Booleans are kept as-is so the form fields can tell a
    JSON ``true`` apart from the number ``1``.
    """
    formdata = MultiDict(
        (key, _formdata_value(value))
        for key, value in payload.items()
        if value is not None and not isinstance(value, (dict, list))
    )
    return form_class(formdata=formdata)
