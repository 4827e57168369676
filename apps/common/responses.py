from __future__ import annotations

import json
from typing import Any

from django.core.exceptions import ValidationError
from django.http import JsonResponse


def flash(kind: str, title: str, message: str) -> dict[str, Any]:
    return {"flash": {"type": kind, "title": title, "message": message}}


def error_response(message: str | ValidationError, *, status: int = 422, title: str = "Oops") -> JsonResponse:
    if isinstance(message, ValidationError):
        message = " ".join(message.messages)
    return JsonResponse(flash("error", title, message), status=status)


def success_response(data: dict[str, Any], message: str, *, status: int = 200, title: str = "Done!") -> JsonResponse:
    """JSON body plus an HX-Trigger flash for HTMX front ends."""
    resp = JsonResponse({**data, **flash("success", title, message)}, status=status)
    resp["HX-Trigger"] = json.dumps(flash("success", title, message))
    return resp
