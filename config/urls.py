from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("auth/", include("apps.accounts.auth_urls")),
    path("", include("apps.orders.urls")),
    path("", include("apps.bookkeeping.urls")),
    path("", include("apps.menu.urls")),
    # Healthcheck endpoint
    path("healthz", lambda _request: HttpResponse("ok")),
]
