from django.apps import AppConfig


class MenuConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.menu"
    verbose_name = "Menu"

    def ready(self) -> None:
        from . import signals  # noqa: F401
