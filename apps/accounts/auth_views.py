from __future__ import annotations

import logging

from django.contrib.auth import get_user_model, login as auth_login, logout as auth_logout
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from apps.common.rate_limit import login_throttle

User = get_user_model()
logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def landing_url(user) -> str:
    if user.has_role(User.ROLE_ADMIN):
        return reverse("orders:admin_dashboard")
    return reverse("orders:staff_orders")


def _redirect_response(request: HttpRequest, url: str) -> HttpResponse:
    if getattr(request, "htmx", False):
        resp = HttpResponse(status=204)
        resp["HX-Redirect"] = url
        return resp
    return JsonResponse({"redirect": url})


@require_http_methods(["GET"])
def login_page(request: HttpRequest) -> HttpResponse:
    if request.user.is_authenticated:
        return _redirect_response(request, landing_url(request.user))
    return JsonResponse({"detail": "Sign in with email and password.", "next": request.GET.get("next", "")})


@require_POST
def login_start(request: HttpRequest) -> HttpResponse:
    rl = login_throttle(request)
    if not rl.allowed:
        resp = JsonResponse({"detail": "Too many attempts. Try again in a few seconds."}, status=429)
        resp["Retry-After"] = str(rl.retry_after)
        return resp

    email = _normalize_email(request.POST.get("email", ""))
    password = request.POST.get("password", "")

    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if not user or not user.check_password(password):
        logger.warning("Login failed for email=%s from ip=%s", email, request.META.get("REMOTE_ADDR"))
        return JsonResponse(
            {"flash": {"type": "error", "title": "Login failed", "message": "Invalid credentials."}},
            status=400,
        )

    auth_login(request, user, backend="django.contrib.auth.backends.ModelBackend")
    logger.info("Login success: user_id=%s role=%s", user.id, user.role)
    return _redirect_response(request, landing_url(user))


@require_POST
def logout_view(request: HttpRequest) -> HttpResponse:
    auth_logout(request)
    return _redirect_response(request, reverse("accounts:auth_login"))
