from django.contrib import admin

from .models import MenuItem, Topping


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "is_available", "allow_toppings", "created_at")
    list_filter = ("is_available", "allow_toppings", "category")
    search_fields = ("name", "description", "category")
    ordering = ("category", "name")
    list_editable = ("is_available",)


@admin.register(Topping)
class ToppingAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "is_available", "created_at")
    list_filter = ("is_available", "category")
    search_fields = ("name", "category")
    ordering = ("category", "name")
    list_editable = ("is_available",)
