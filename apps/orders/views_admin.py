from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.accounts.decorators import role_required
from apps.common.responses import error_response
from .filters import filter_orders, order_stats, orders_in_range, parse_date_range
from .forms import DateRangeForm
from .serializers import serialize_order, serialize_stats


@role_required("admin")
@require_GET
def dashboard(request):
    """Orders created in a date range (default: today) with headline stats.

    Stats cover the whole range; search/type/status only narrow the list.
    """
    form = DateRangeForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=422)
    try:
        start, end = parse_date_range(form.cleaned_data.get("start"), form.cleaned_data.get("end"))
        in_range = orders_in_range(start, end).prefetch_related("order_items__toppings", "status_changes")
        listed = filter_orders(in_range, **form.filters())
    except ValidationError as e:
        return error_response(e)

    return JsonResponse({
        "start": start.date().isoformat(),
        "end": end.date().isoformat(),
        "stats": serialize_stats(order_stats(in_range)),
        "orders": [serialize_order(o, with_items=True) for o in listed],
    })
