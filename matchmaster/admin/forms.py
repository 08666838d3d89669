"""Forms for the admin blueprint."""

from wtforms import DateField, Form, IntegerField, SelectField, StringField
from wtforms.validators import Length, NumberRange, Optional

from matchmaster.audit.models import AdminAction


class AdminLogFilterForm(Form):
    """Query-string filters for browsing the audit trail."""

    date_from = DateField("From", format="%Y-%m-%d", validators=[Optional()])
    date_to = DateField("To", format="%Y-%m-%d", validators=[Optional()])
    search = StringField("Search", validators=[Optional(), Length(max=100)])
    action = SelectField(
        "Action",
        choices=[("", "All actions")] + [(a.value, a.value) for a in AdminAction],
        default="",
    )
    page = IntegerField("Page", default=1, validators=[NumberRange(min=1)])
    limit = IntegerField("Limit", validators=[Optional(), NumberRange(min=1)])

    def first_error(self) -> str:
        """Return the first validation message, prefixed with its field label."""
        for field in self:
            if field.errors:
                return f"{field.label.text}: {field.errors[0]}"
        return "Invalid filters."
