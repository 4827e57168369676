from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _


User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = (
        "email",
        "username",
        "full_name",
        "role",
        "is_active",
        "last_login",
    )
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "full_name", "username")
    ordering = ("email",)

    fieldsets = DjangoUserAdmin.fieldsets + (
        (
            _("Console access"),
            {"fields": ("role", "full_name")},
        ),
    )

    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        (
            _("Console access"),
            {"classes": ("wide",), "fields": ("email", "full_name", "role")},
        ),
    )
