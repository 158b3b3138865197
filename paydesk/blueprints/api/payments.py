# paydesk/blueprints/api/payments.py
from flask import request, current_app

from ...errors import NotFoundError
from ...models.payment import check_status
from ...services.storage_service import get_storage
from .forms import PaymentForm, StatusForm, BulkStatusForm
from .utils import ok, parse_datetime, validated
from . import api_bp


@api_bp.get("/payments")
def payments_list():
    args = request.args
    status = (args.get("status") or "").strip().lower()
    payments = get_storage().get_payments(
        developer_name=(args.get("developerName") or "").strip() or None,
        status=None if status in ("", "all") else check_status(status),
        project=(args.get("project") or "").strip() or None,
        component=(args.get("component") or "").strip() or None,
        from_date=parse_datetime(args.get("fromDate"), "fromDate"),
        to_date=parse_datetime(args.get("toDate"), "toDate"),
    )
    return ok([p.to_dict() for p in payments], count=len(payments))


@api_bp.post("/payments")
def payment_create():
    form = validated(PaymentForm)
    payment = get_storage().create_payment(
        form.developer_name.data,
        form.amount.data,
        payment_type=form.payment_type.data,
        payment_method=form.payment_method.data,
        payment_status=form.payment_status.data,
        payment_date=parse_datetime(form.payment_date.data, "paymentDate"),
        task_id=form.task_id.data,
        task_title=form.task_title.data,
        project=form.project.data,
        component=form.component.data,
        notes=form.notes.data,
    )
    return ok(payment.to_dict(), 201)


@api_bp.get("/payments/<payment_id>")
def payment_detail(payment_id):
    payment = get_storage().get_payment(payment_id)
    if payment is None:
        raise NotFoundError(f"Payment {payment_id} not found")
    return ok(payment.to_dict())


@api_bp.patch("/payments/<payment_id>/status")
def payment_status(payment_id):
    form = validated(StatusForm)
    payment = get_storage().update_payment_status(payment_id, form.status.data)
    return ok(payment.to_dict())


@api_bp.post("/payments/bulk")
def payments_bulk_status():
    form = validated(BulkStatusForm)
    ids = form.payment_ids.data
    updated = get_storage().bulk_update_payment_status(ids, form.status.data)
    if len(updated) < len(ids):
        current_app.logger.info(f"Bulk status: {len(ids) - len(updated)} unknown payment id(s) skipped")
    return ok([p.to_dict() for p in updated], updated=len(updated), requested=len(ids))
