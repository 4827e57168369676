import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from apps.common.rate_limit import LimitResult

User = get_user_model()


@pytest.mark.django_db
def test_staff_login_lands_on_order_console(client, staff_user):
    r = client.post(reverse("accounts:auth_login_post"), {"email": "STAFF@example.com ", "password": "pwd123"})
    assert r.status_code == 200
    assert r.json()["redirect"] == reverse("orders:staff_orders")

    r = client.get(reverse("orders:staff_orders"))
    assert r.status_code == 200


@pytest.mark.django_db
def test_admin_login_lands_on_dashboard_via_htmx(client, owner_user):
    r = client.post(
        reverse("accounts:auth_login_post"),
        {"email": "owner@example.com", "password": "pwd123"},
        HTTP_HX_REQUEST="true",
    )
    assert r.status_code == 204
    assert r.headers.get("HX-Redirect") == reverse("orders:admin_dashboard")


@pytest.mark.django_db
def test_login_rejects_bad_password_and_inactive_users(client, staff_user):
    r = client.post(reverse("accounts:auth_login_post"), {"email": "staff@example.com", "password": "nope"})
    assert r.status_code == 400
    assert r.json()["flash"]["title"] == "Login failed"

    staff_user.is_active = False
    staff_user.save()
    r = client.post(reverse("accounts:auth_login_post"), {"email": "staff@example.com", "password": "pwd123"})
    assert r.status_code == 400


@pytest.mark.django_db
def test_login_is_rate_limited(client, staff_user, monkeypatch):
    monkeypatch.setattr(
        "apps.accounts.auth_views.login_throttle", lambda request: LimitResult(False, 0, 30)
    )
    r = client.post(reverse("accounts:auth_login_post"), {"email": "staff@example.com", "password": "pwd123"})
    assert r.status_code == 429
    assert r["Retry-After"] == "30"


@pytest.mark.django_db
def test_login_page_redirects_signed_in_users(staff_client):
    r = staff_client.get(reverse("accounts:auth_login"))
    assert r.json()["redirect"] == reverse("orders:staff_orders")


@pytest.mark.django_db
def test_logout(staff_client):
    r = staff_client.post(reverse("accounts:auth_logout"))
    assert r.json()["redirect"] == reverse("accounts:auth_login")
    assert staff_client.get(reverse("orders:staff_orders")).status_code == 302


@pytest.mark.django_db
def test_email_is_stored_lowercase():
    user = User.objects.create_user(username="mixed", email="Mixed@Example.COM", password="pwd123")
    assert user.email == "mixed@example.com"
    assert user.role == User.ROLE_STAFF


def test_rate_limit_counts_within_window():
    from apps.common.rate_limit import rate_limit

    def at(second):
        return rate_limit("test", "1.2.3.4", limit=2, window_seconds=60, clock=lambda: 1_200 + second)

    results = [at(0), at(10), at(20)]
    assert [r.allowed for r in results] == [True, True, False]
    assert [r.remaining for r in results] == [1, 0, 0]
    assert results[2].retry_after == 40
    # Next window starts fresh
    assert at(60).allowed is True


@pytest.mark.django_db
def test_repeated_logins_hit_the_throttle(client, staff_user, settings):
    settings.LOGIN_RATE_LIMIT = 2
    settings.LOGIN_RATE_WINDOW = 3600
    url = reverse("accounts:auth_login_post")

    codes = [client.post(url, {"email": "staff@example.com", "password": "nope"}).status_code for _ in range(3)]

    assert codes == [400, 400, 429]
