from django.urls import path
from . import auth_views as views


app_name = "accounts"

urlpatterns = [
    path("login", views.login_page, name="auth_login"),
    path("login.post", views.login_start, name="auth_login_post"),
    path("logout", views.logout_view, name="auth_logout"),
]
