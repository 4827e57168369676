from django.core.exceptions import ValidationError
from django.http import Http404, JsonResponse
from django.views.decorators.http import require_GET

from apps.common.money import fmt_money, money_str
from apps.common.responses import error_response
from apps.orders.pricing import unit_preview
from .selectors import ALL_CATEGORIES, list_available_items, list_available_toppings, list_categories
from .serializers import serialize_item

TOPPING_PREFIX = "t_"


@require_GET
def menu_home(request):
    category = (request.GET.get("category") or ALL_CATEGORIES).strip()
    toppings = list_available_toppings()
    items = list_available_items(category)
    return JsonResponse({
        "categories": list_categories(),
        "category": category,
        "items": [serialize_item(item, toppings) for item in items],
    })


@require_GET
def item_price(request, item_id):
    """Per-unit price of an item with toppings given as ``t_<topping id>=<qty>``."""
    item = next((i for i in list_available_items() if str(i.id) == str(item_id)), None)
    if item is None:
        raise Http404()
    selections = {
        key[len(TOPPING_PREFIX):]: value
        for key, value in request.GET.items()
        if key.startswith(TOPPING_PREFIX) and value != ""
    }
    try:
        price = unit_preview(item, selections, list_available_toppings())
    except ValidationError as e:
        return error_response(e)
    return JsonResponse({
        "item_id": str(item.id),
        "base_price": money_str(item.price),
        "total": money_str(price),
        "total_display": fmt_money(price),
    })
