"""A task represents a unit of work that belongs to a Project

A Task belongs to exactly one Project
A Task carries an estimate of the hours it needs
A Task can be assigned to multiple Coworkers through Assignments
Priority and status are free text; the known values are only suggestions
Deleting a Task deletes all of its Assignments

"""
from __future__ import annotations

from datetime import datetime

from database import db
from utils.datetimes import format_iso_datetime

PRIORITY_CHOICES = ("Low", "Normal", "High", "Critical")
STATUS_CHOICES = ("Not started", "In progress", "Completed", "Continuous")

DEFAULT_PRIORITY = "Normal"
DEFAULT_STATUS = "Not started"
COMPLETED_STATUS = "Completed"


class Task(db.Model):
    __tablename__ = "task"

    UPDATABLE_FIELDS = (
        "name",
        "project_id",
        "priority",
        "status",
        "estimated_hours",
        "weekly_effort",
        "completed",
        "note",
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    project_id = db.Column(
        db.Integer, db.ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    priority = db.Column(db.String(50), nullable=False, default=DEFAULT_PRIORITY)
    status = db.Column(db.String(50), nullable=False, default=DEFAULT_STATUS)
    estimated_hours = db.Column(db.Float, nullable=False, default=0)
    weekly_effort = db.Column(db.Float, nullable=False, default=0)
    added = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    completed = db.Column(db.DateTime, nullable=True)
    note = db.Column(db.Text, nullable=False, default="")

    project = db.relationship("Project", back_populates="tasks")
    assignments = db.relationship(
        "Assignment",
        back_populates="task",
        lazy=True,
        cascade="all, delete-orphan",
    )

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED_STATUS

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "projectId": self.project_id,
            "priority": self.priority,
            "status": self.status,
            "estimatedHours": self.estimated_hours,
            "weeklyEffort": self.weekly_effort,
            "added": format_iso_datetime(self.added),
            "completed": format_iso_datetime(self.completed),
            "note": self.note,
        }

    def __repr__(self):
        return f"<Task {self.name}>"
