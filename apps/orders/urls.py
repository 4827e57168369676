from django.urls import path

from . import views_admin as admin_views
from . import views_staff as staff_views

app_name = "orders"

urlpatterns = [
    # Staff console
    path("staff/catalog", staff_views.catalog, name="staff_catalog"),
    path("staff/orders", staff_views.orders_list, name="staff_orders"),
    path("staff/orders/new", staff_views.order_create, name="order_create"),
    path("staff/orders/<uuid:order_id>", staff_views.order_detail, name="order_detail"),
    path("staff/orders/<uuid:order_id>/status", staff_views.update_order_status, name="update_order_status"),
    path("staff/orders/<uuid:order_id>/cancel", staff_views.cancel_order, name="cancel_order"),
    # Admin dashboard
    path("admin-panel/dashboard", admin_views.dashboard, name="admin_dashboard"),
]
