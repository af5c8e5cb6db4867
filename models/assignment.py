"""An assignment commits hours of one Coworker to one Task.

Hours are never checked against the task estimate or the coworker capacity;
over-commitment is only reported by the capacity service.
"""

from datetime import datetime

from database import db
from utils.datetimes import format_iso_datetime


class Assignment(db.Model):
    __tablename__ = "assignment"

    UPDATABLE_FIELDS = ("coworker_id", "task_id", "hours_assigned", "note", "assigned_by")

    id = db.Column(db.Integer, primary_key=True)
    coworker_id = db.Column(
        db.Integer, db.ForeignKey("coworker.id", ondelete="CASCADE"), nullable=False, index=True
    )
    task_id = db.Column(
        db.Integer, db.ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hours_assigned = db.Column(db.Float, nullable=False, default=0)
    assigned_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    note = db.Column(db.Text, nullable=False, default="")
    assigned_by = db.Column(db.Text, nullable=False, default="")

    coworker = db.relationship("Coworker", back_populates="assignments")
    task = db.relationship("Task", back_populates="assignments")

    def to_dict(self):
        return {
            "id": self.id,
            "coworkerId": self.coworker_id,
            "taskItemId": self.task_id,
            "hoursAssigned": self.hours_assigned,
            "assignedDate": format_iso_datetime(self.assigned_date),
            "note": self.note,
            "assignedBy": self.assigned_by,
        }

    def __repr__(self):
        return f"<Assignment coworker={self.coworker_id} task={self.task_id} hours={self.hours_assigned}>"
