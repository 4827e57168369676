from django.urls import path

from . import views

app_name = "bookkeeping"

urlpatterns = [
    path("admin-panel/expenses", views.ledger, name="ledger"),
    path("admin-panel/expenses/add", views.add_expense, name="add_expense"),
    path("admin-panel/purchases/add", views.add_purchase, name="add_purchase"),
    path("admin-panel/expenses/<uuid:expense_id>/delete", views.delete_expense, name="delete_expense"),
    path("admin-panel/purchases/<uuid:purchase_id>/delete", views.delete_purchase, name="delete_purchase"),
]
