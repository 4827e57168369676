import logging

from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.decorators import role_required
from apps.common.money import fmt_money, money_str
from apps.common.responses import error_response, flash, success_response
from .forms import ExpenseForm, PurchaseForm
from .models import Expense, Purchase
from .services import summarize

log = logging.getLogger(__name__)

TABS = {"expenses", "purchases"}


def _serialize_expense(e: Expense) -> dict:
    return {
        "id": str(e.id),
        "title": e.title,
        "description": e.description,
        "amount": money_str(e.amount),
        "category": e.category,
        "expense_date": e.expense_date.isoformat(),
    }


def _serialize_purchase(p: Purchase) -> dict:
    return {
        "id": str(p.id),
        "supplier_name": p.supplier_name,
        "item_name": p.item_name,
        "quantity": p.quantity,
        "unit_price": money_str(p.unit_price),
        "total_amount": money_str(p.total_amount),
        "purchase_date": p.purchase_date.isoformat(),
    }


@role_required("admin")
@require_GET
def ledger(request):
    tab = (request.GET.get("tab") or "expenses").lower()
    if tab not in TABS:
        tab = "expenses"
    expenses = list(Expense.objects.order_by("-expense_date", "-created_at"))
    purchases = list(Purchase.objects.order_by("-purchase_date", "-created_at"))
    summary = summarize(expenses, purchases)
    rows = [_serialize_expense(e) for e in expenses] if tab == "expenses" else [_serialize_purchase(p) for p in purchases]
    return JsonResponse({
        "tab": tab,
        "rows": rows,
        "totals": {
            "expenses": money_str(summary.total_expenses),
            "expenses_display": fmt_money(summary.total_expenses),
            "purchases": money_str(summary.total_purchases),
            "purchases_display": fmt_money(summary.total_purchases),
            "outflow": money_str(summary.total_outflow),
        },
    })


def _create(request, form_class, serialize, label: str):
    form = form_class(request.POST)
    if not form.is_valid():
        return JsonResponse(
            {"errors": form.errors.get_json_data(), **flash("error", "Oops", "Please fill in all required fields.")},
            status=422,
        )
    try:
        obj = form.save()
    except DatabaseError:
        log.exception("[bookkeeping] Failed to save %s", label)
        return error_response(f"Failed to add {label}.", status=503, title="Error")
    log.info("[bookkeeping] Added %s id=%s", label, obj.id)
    return success_response({"record": serialize(obj)}, f"{label.capitalize()} added!", status=201)


@role_required("admin")
@require_POST
def add_expense(request):
    return _create(request, ExpenseForm, _serialize_expense, "expense")


@role_required("admin")
@require_POST
def add_purchase(request):
    return _create(request, PurchaseForm, _serialize_purchase, "purchase")


@role_required("admin")
@require_POST
def delete_expense(request, expense_id):
    expense = get_object_or_404(Expense, id=expense_id)
    expense.delete()
    log.info("[bookkeeping] Deleted expense id=%s", expense_id)
    return success_response({"deleted": str(expense_id)}, "Expense deleted!")


@role_required("admin")
@require_POST
def delete_purchase(request, purchase_id):
    purchase = get_object_or_404(Purchase, id=purchase_id)
    purchase.delete()
    log.info("[bookkeeping] Deleted purchase id=%s", purchase_id)
    return success_response({"deleted": str(purchase_id)}, "Purchase deleted!")
