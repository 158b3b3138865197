# paydesk/blueprints/api/developers.py
from ...services.storage_service import get_storage
from .forms import DeveloperForm, DeveloperActiveForm
from .utils import ok, validated
from . import api_bp


def _developer(row) -> dict:
    return {
        "name": row.developer_name,
        "active": row.active,
        "totalPaid": float(row.total_paid),
        "totalPending": float(row.total_pending),
    }


@api_bp.get("/developers")
def developers_list():
    return ok([_developer(row) for row in get_storage().get_developer_ledgers()])


@api_bp.post("/developers")
def developer_register():
    form = validated(DeveloperForm)
    row = get_storage().register_developer(form.name.data, active=form.active.data)
    return ok(_developer(row), 201)


@api_bp.patch("/developers/<path:developer_name>")
def developer_update(developer_name):
    form = validated(DeveloperActiveForm)
    row = get_storage().set_developer_active(developer_name, form.active.data)
    return ok(_developer(row))
