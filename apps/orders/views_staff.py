import json

from django.core.exceptions import ValidationError
from django.core.paginator import EmptyPage, Paginator
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.decorators import role_required
from apps.common.responses import error_response, success_response
from apps.menu.selectors import list_available_items, list_available_toppings, list_categories
from apps.menu.serializers import serialize_item
from . import services
from .drafts import DraftOrder
from .exceptions import PersistenceError
from .filters import filter_orders
from .forms import CancelForm, OrderFilterForm, StatusForm
from .models import Order
from .serializers import serialize_order

CONSOLE_ROLES = ("staff", "admin")
PAGE_SIZE = 25


def _detail_qs():
    return Order.objects.prefetch_related("order_items__toppings", "status_changes")


def _page_number(request) -> int:
    raw = request.GET.get("page") or "1"
    return int(raw) if raw.isdigit() else 1


@role_required(*CONSOLE_ROLES)
@require_GET
def catalog(request):
    items = list_available_items()
    toppings = list_available_toppings()
    return JsonResponse({
        "categories": list_categories(),
        "items": [serialize_item(item, toppings) for item in items],
    })


@role_required(*CONSOLE_ROLES)
@require_GET
def orders_list(request):
    form = OrderFilterForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=422)
    qs = filter_orders(Order.objects.order_by("-created_at"), **form.filters())

    paginator = Paginator(qs, PAGE_SIZE)
    try:
        page_obj = paginator.page(_page_number(request))
    except EmptyPage:
        page_obj = paginator.page(max(1, paginator.num_pages))

    return JsonResponse({
        "orders": [serialize_order(o) for o in page_obj.object_list],
        "page": page_obj.number,
        "num_pages": paginator.num_pages,
        "count": paginator.count,
        "has_next": page_obj.has_next(),
        "has_prev": page_obj.has_previous(),
    })


@role_required(*CONSOLE_ROLES)
@require_POST
def order_create(request):
    try:
        payload = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response("Malformed request body.", status=400)
    if not isinstance(payload, dict):
        return error_response("Malformed request body.", status=400)

    try:
        draft = DraftOrder.from_payload(payload, list_available_items(), list_available_toppings())
        req = draft.to_order_request(
            customer_name=str(payload.get("customer_name") or ""),
            customer_phone=str(payload.get("customer_phone") or ""),
            order_type=str(payload.get("order_type") or Order.TYPE_DINE_IN),
            notes=str(payload.get("notes") or ""),
            idempotency_key=payload.get("idempotency_key") or request.headers.get("Idempotency-Key"),
        )
        order = services.submit_order(req, created_by=request.user, source=request.user.role)
    except ValidationError as e:
        return error_response(e)
    except PersistenceError:
        return error_response("Failed to create order. Please try again.", status=503, title="Error")

    order = _detail_qs().get(pk=order.pk)
    return success_response({"order": serialize_order(order, with_items=True)}, "Order created successfully!", status=201)


@role_required(*CONSOLE_ROLES)
@require_GET
def order_detail(request, order_id):
    order = get_object_or_404(_detail_qs(), id=order_id)
    return JsonResponse({"order": serialize_order(order, with_items=True)})


@role_required(*CONSOLE_ROLES)
@require_POST
def update_order_status(request, order_id):
    order = get_object_or_404(Order, id=order_id)
    form = StatusForm(request.POST)
    if not form.is_valid():
        return error_response("Invalid status.", status=400)
    try:
        services.change_status(
            order,
            form.cleaned_data["status"],
            reason=form.cleaned_data.get("reason") or "",
            source=request.user.role,
        )
    except ValidationError as e:
        return error_response(e, status=400)
    except PersistenceError:
        return error_response("Failed to update order.", status=503, title="Error")
    return success_response({"order": serialize_order(order)}, "Order status updated!")


@role_required(*CONSOLE_ROLES)
@require_POST
def cancel_order(request, order_id):
    order = get_object_or_404(Order, id=order_id)
    form = CancelForm(request.POST)
    if not form.is_valid():
        return error_response("Cancellation reason is too long.", status=400)
    try:
        services.cancel_order(order, form.cleaned_data.get("reason") or "", source=request.user.role)
    except ValidationError as e:
        return error_response(e, status=400)
    except PersistenceError:
        return error_response("Failed to cancel order.", status=503, title="Error")
    return success_response({"order": serialize_order(order)}, "Order cancelled successfully!")
