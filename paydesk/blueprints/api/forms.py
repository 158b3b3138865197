# paydesk/blueprints/api/forms.py
from __future__ import annotations
from decimal import Decimal

from flask_wtf import FlaskForm
from wtforms import BooleanField, DecimalField, Field, StringField
from wtforms.validators import (
    AnyOf,
    DataRequired,
    Length,
    NumberRange,
    Optional as Opt,
    StopValidation,
)

from ...models.payment import PAYMENT_METHODS, PAYMENT_STATUSES, PAYMENT_TYPES


# ---------------------
# Validators / Fields
# ---------------------

def _present(form, field):
    """Like InputRequired, but a JSON ``0`` counts as supplied."""
    if not field.raw_data or field.raw_data[0] in (None, ""):
        raise StopValidation("This field is required.")


class TextField(StringField):
    """StringField that accepts JSON integers (e.g. a numeric task id) but no other non-strings."""

    def process_formdata(self, valuelist):
        values = [v for v in valuelist if v is not None]
        if any(isinstance(v, bool) or not isinstance(v, (str, int)) for v in values):
            raise ValueError(self.gettext("Not a valid string value."))
        super().process_formdata([v if isinstance(v, str) else str(v) for v in values])


class MoneyField(DecimalField):
    """DecimalField that refuses JSON booleans, which Decimal would read as 0 or 1."""

    def process_formdata(self, valuelist):
        if valuelist and isinstance(valuelist[0], bool):
            self.data = None
            raise ValueError(self.gettext("Not a valid decimal value."))
        super().process_formdata(valuelist)


class IdListField(Field):
    """Takes a JSON array (or repeated form keys) as a list of non-blank strings."""

    def _value(self):
        return ",".join(self.data or [])

    def process_formdata(self, valuelist):
        self.data = [str(v).strip() for v in valuelist if v is not None and str(v).strip()]


class JSONBooleanField(BooleanField):
    """A missing key keeps the default instead of meaning unchecked."""

    def process_formdata(self, valuelist):
        if valuelist:
            super().process_formdata(valuelist)


STATUS_VALIDATORS = [AnyOf(PAYMENT_STATUSES, message="Must be one of: pending, sent, confirmed.")]


# -------------
# API Forms
# -------------

class ApiForm(FlaskForm):
    class Meta:
        csrf = False

    def error_map(self) -> dict:
        """Errors keyed by wire (camelCase) name."""
        return {field.name: list(field.errors) for field in self if field.errors}


class PaymentForm(ApiForm):
    developer_name = TextField("Developer", name="developerName",
                                 validators=[DataRequired(), Length(max=120)])
    amount = MoneyField("Amount", validators=[
        _present,
        NumberRange(min=Decimal("0.01"), message="Must be greater than zero."),
    ])
    payment_type = TextField("Payment type", name="paymentType",
                               validators=[Opt(), AnyOf(PAYMENT_TYPES)])
    payment_method = TextField("Payment method", name="paymentMethod",
                                 validators=[Opt(), AnyOf(PAYMENT_METHODS)])
    payment_status = TextField("Status", name="paymentStatus",
                                 validators=[Opt(), *STATUS_VALIDATORS])
    payment_date = TextField("Payment date", name="paymentDate", validators=[Opt()])
    task_id = TextField("Task id", name="taskId", validators=[Opt(), Length(max=64)])
    task_title = TextField("Task title", name="taskTitle", validators=[Opt(), Length(max=200)])
    project = TextField("Project", validators=[Opt(), Length(max=120)])
    component = TextField("Component", validators=[Opt(), Length(max=120)])
    notes = TextField("Notes", validators=[Opt(), Length(max=2000)])


class StatusForm(ApiForm):
    status = TextField("Status", validators=[DataRequired(), *STATUS_VALIDATORS])


class BulkStatusForm(ApiForm):
    payment_ids = IdListField("Payments", name="paymentIds", validators=[_present])
    status = TextField("Status", validators=[DataRequired(), *STATUS_VALIDATORS])


class DeveloperForm(ApiForm):
    name = TextField("Name", validators=[DataRequired(), Length(max=120)])
    active = JSONBooleanField("Active", default=True)


class DeveloperActiveForm(ApiForm):
    active = JSONBooleanField("Active", validators=[_present])
