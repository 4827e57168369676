from django.contrib import admin

from .models import Expense, Purchase


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "amount", "expense_date", "created_at")
    list_filter = ("category",)
    search_fields = ("title", "description", "category")
    date_hierarchy = "expense_date"
    ordering = ("-expense_date",)


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ("item_name", "supplier_name", "quantity", "unit_price", "total_amount", "purchase_date")
    search_fields = ("item_name", "supplier_name")
    date_hierarchy = "purchase_date"
    ordering = ("-purchase_date",)
    readonly_fields = ("total_amount",)
