from __future__ import annotations

from django.db.models.signals import post_delete, post_save

from . import selectors
from .models import MenuItem, Topping


def _invalidate_catalog(*_args, **_kwargs) -> None:
    selectors.invalidate_catalog_cache()


post_save.connect(_invalidate_catalog, sender=MenuItem, dispatch_uid="menu.item.invalidate.save")
post_delete.connect(_invalidate_catalog, sender=MenuItem, dispatch_uid="menu.item.invalidate.delete")
post_save.connect(_invalidate_catalog, sender=Topping, dispatch_uid="menu.topping.invalidate.save")
post_delete.connect(_invalidate_catalog, sender=Topping, dispatch_uid="menu.topping.invalidate.delete")
