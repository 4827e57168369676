from django.urls import path

from . import views_public as views

app_name = "menu"

urlpatterns = [
    path("", views.menu_home, name="menu_home"),
    path("menu/items/<uuid:item_id>/price", views.item_price, name="item_price"),
]
