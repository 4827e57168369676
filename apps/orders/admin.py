from django.contrib import admin

from .models import Order, OrderItem, OrderItemTopping, OrderStatusChange


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("menu_item", "menu_item_name", "quantity", "unit_price", "total_price", "special_instructions")
    readonly_fields = ("unit_price", "total_price")
    show_change_link = True


class OrderStatusChangeInline(admin.TabularInline):
    model = OrderStatusChange
    extra = 0
    fields = ("status", "source", "note", "created_at")
    readonly_fields = fields
    can_delete = False


class OrderItemToppingInline(admin.TabularInline):
    model = OrderItemTopping
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "status",
        "customer_name",
        "customer_phone",
        "order_type",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "order_type")
    search_fields = ("order_number", "customer_name", "customer_phone")
    date_hierarchy = "created_at"
    ordering = ("-created_at",)
    readonly_fields = ("order_number", "total_amount", "idempotency_key")
    inlines = [OrderItemInline, OrderStatusChangeInline]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("order", "menu_item_name", "quantity", "unit_price", "total_price")
    search_fields = ("order__order_number", "menu_item_name")
    list_select_related = ("order",)
    inlines = [OrderItemToppingInline]
