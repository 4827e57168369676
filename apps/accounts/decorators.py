from __future__ import annotations

import logging
from functools import wraps

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def _hx_redirect(url: str) -> HttpResponse:
    resp = HttpResponse(status=204)
    resp["HX-Redirect"] = url
    return resp


def auth_redirect(request: HttpRequest) -> HttpResponse:
    """Send the caller back to login, discarding whatever it was doing."""
    if getattr(request, "htmx", False):
        return _hx_redirect(settings.LOGIN_URL)
    return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)


def role_required(*roles: str):
    """Allow only authenticated users whose role is in `roles`.

    Anonymous users and users with another role are both redirected to the
    login page.
    """

    def decorator(view):
        @wraps(view)
        def _wrapped(request: HttpRequest, *args, **kwargs):
            user = request.user
            if not user.is_authenticated:
                return auth_redirect(request)
            if not user.has_role(*roles):
                logger.warning("Role check failed: user_id=%s role=%s path=%s", user.id, user.role, request.path)
                return auth_redirect(request)
            return view(request, *args, **kwargs)

        return _wrapped

    return decorator
