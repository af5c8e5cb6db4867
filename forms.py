import math

from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    FloatField,
    IntegerField,
    SubmitField,
    StringField,
    TextAreaField,
)
from wtforms.validators import (
    DataRequired,
    Length,
    Optional,
    ValidationError,
)

from models.task import DEFAULT_PRIORITY, DEFAULT_STATUS
from services import entity_service
from services.entity_service import EntityNotFound
from utils.datetimes import parse_iso_datetime


# JSON fields
# ------------------------------
class PresenceBooleanField(BooleanField):
    """Boolean that keeps its default when the key is absent and only accepts JSON booleans."""

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        if not isinstance(valuelist[0], bool):
            raise ValueError(self.gettext("Not a valid boolean value."))
        self.data = valuelist[0]


class JsonIntegerField(IntegerField):
    def process_formdata(self, valuelist):
        # int(True) == 1
        if valuelist and isinstance(valuelist[0], bool):
            self.data = None
            raise ValueError(self.gettext("Not a valid integer value."))
        super().process_formdata(valuelist)


class JsonFloatField(FloatField):
    def process_formdata(self, valuelist):
        if valuelist and isinstance(valuelist[0], bool):
            self.data = None
            raise ValueError(self.gettext("Not a valid float value."))
        super().process_formdata(valuelist)


def finite_number(form, field):
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError("Must be a finite number.")


def _require_existing(loader, entity_id, message):
    try:
        loader(entity_id)
    except EntityNotFound:
        raise ValidationError(message)


class ApiForm(FlaskForm):
    """Base form for JSON payloads posted to the REST API."""

    class Meta:
        csrf = False

    def entity_fields(self) -> dict:
        raise NotImplementedError

    @staticmethod
    def _parse_timestamp(field):
        try:
            return parse_iso_datetime(field.data)
        except ValueError:
            raise ValidationError("Not a valid ISO 8601 timestamp.")


class CoworkerForm(ApiForm):
    name = StringField("Name", [DataRequired()])
    capacity = JsonFloatField("Capacity", [Optional(), finite_number], default=0)
    isActive = PresenceBooleanField("Active", default=True)

    def entity_fields(self) -> dict:
        return {
            "name": self.name.data,
            "capacity": self.capacity.data or 0,
            "is_active": bool(self.isActive.data),
        }


class ProjectForm(ApiForm):
    name = StringField("Name", [DataRequired()])

    def entity_fields(self) -> dict:
        return {"name": self.name.data}


class TaskForm(ApiForm):
    name = StringField("Name", [DataRequired()])
    projectId = JsonIntegerField("Project", [DataRequired()])
    priority = StringField("Priority", [Optional()], default=DEFAULT_PRIORITY)
    status = StringField("Status", [Optional()], default=DEFAULT_STATUS)
    estimatedHours = JsonFloatField("Estimated Hours", [Optional(), finite_number], default=0)
    weeklyEffort = JsonFloatField("Weekly Effort", [Optional(), finite_number], default=0)
    completed = StringField("Completed", [Optional()])
    note = TextAreaField("Note", [Optional()], default="")

    def validate_projectId(self, field):
        _require_existing(entity_service.get_project, field.data, "Project does not exist.")

    def validate_completed(self, field):
        self._parse_timestamp(field)

    def entity_fields(self) -> dict:
        return {
            "name": self.name.data,
            "project_id": self.projectId.data,
            "priority": self.priority.data or DEFAULT_PRIORITY,
            "status": self.status.data or DEFAULT_STATUS,
            "estimated_hours": self.estimatedHours.data or 0,
            "weekly_effort": self.weeklyEffort.data or 0,
            "completed": self._parse_timestamp(self.completed),
            "note": self.note.data or "",
        }


class AssignmentForm(ApiForm):
    coworkerId = JsonIntegerField("Coworker", [DataRequired()])
    taskItemId = JsonIntegerField("Task", [DataRequired()])
    hoursAssigned = JsonFloatField("Hours Assigned", [Optional(), finite_number], default=0)
    assignedDate = StringField("Assigned Date", [Optional()])
    note = TextAreaField("Note", [Optional()], default="")
    assignedBy = StringField("Assigned By", [Optional()], default="")

    def validate_coworkerId(self, field):
        _require_existing(entity_service.get_coworker, field.data, "Coworker does not exist.")

    def validate_taskItemId(self, field):
        _require_existing(entity_service.get_task, field.data, "Task does not exist.")

    def validate_assignedDate(self, field):
        self._parse_timestamp(field)

    def entity_fields(self) -> dict:
        fields = {
            "coworker_id": self.coworkerId.data,
            "task_id": self.taskItemId.data,
            "hours_assigned": self.hoursAssigned.data or 0,
            "note": self.note.data or "",
            "assigned_by": self.assignedBy.data or "",
        }
        assigned_date = self._parse_timestamp(self.assignedDate)
        if assigned_date is not None:
            fields["assigned_date"] = assigned_date
        return fields


class DisplayNameForm(FlaskForm):
    userName = StringField(
        "Your name",
        validators=[Optional(), Length(max=80, message="Name must be 80 characters or fewer.")],
    )
    submit = SubmitField("Save")
