"""Utilization and rollup calculations over already-loaded records.

Nothing in this module touches the database. Every function accepts plain
iterables of objects that expose the model attribute names, so the same code
serves the API, the dashboard pages and the tests. Division by zero always
yields ``0``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from models.task import COMPLETED_STATUS

OVER_CAPACITY_THRESHOLD = 100
HIGH_UTILIZATION_THRESHOLD = 80


def _percentage(part: float, whole: float) -> float:
    if not whole or whole <= 0:
        return 0.0
    return part / whole * 100


def _sum_hours(assignments: Iterable[Any]) -> float:
    return sum((a.hours_assigned or 0) for a in assignments)


@dataclass
class CoworkerUtilization:
    """Hours committed by one coworker relative to their capacity."""

    coworker_id: int
    capacity: float
    assigned_hours: float
    available: float
    percentage: float

    @property
    def level(self) -> str:
        return utilization_level(self.percentage)

    @property
    def over_capacity(self) -> bool:
        return self.assigned_hours > self.capacity

    def to_dict(self) -> dict[str, Any]:
        return {
            "coworkerId": self.coworker_id,
            "capacity": self.capacity,
            "assignedHours": self.assigned_hours,
            "available": self.available,
            "percentage": self.percentage,
            "level": self.level,
        }


@dataclass
class TaskRollup:
    """Assignment totals for a single task."""

    task_id: int
    estimated_hours: float
    total_assigned: float
    remaining: float
    assignment_count: int

    @property
    def over_allocated_hours(self) -> float:
        return max(0.0, self.total_assigned - self.estimated_hours)

    @property
    def progress_percentage(self) -> float:
        return _percentage(self.total_assigned, self.estimated_hours)

    def to_dict(self) -> dict[str, Any]:
        return {
            "taskItemId": self.task_id,
            "estimatedHours": self.estimated_hours,
            "totalAssigned": self.total_assigned,
            "remaining": self.remaining,
            "overAllocatedHours": self.over_allocated_hours,
            "progressPercentage": self.progress_percentage,
            "assignmentCount": self.assignment_count,
        }


@dataclass
class ProjectRollup:
    """Task and hour totals for a project."""

    project_id: int
    task_count: int
    status_counts: dict[str, int] = field(default_factory=dict)
    total_estimated_hours: float = 0.0
    total_assigned_hours: float = 0.0
    completion_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "projectId": self.project_id,
            "taskCount": self.task_count,
            "statusCounts": dict(self.status_counts),
            "totalEstimatedHours": self.total_estimated_hours,
            "totalAssignedHours": self.total_assigned_hours,
            "completionPercentage": self.completion_percentage,
        }


@dataclass
class TeamSummary:
    total_capacity: float
    total_assigned: float
    utilization_percentage: float
    coworker_count: int
    over_capacity_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCapacity": self.total_capacity,
            "totalAssigned": self.total_assigned,
            "utilizationPercentage": self.utilization_percentage,
            "coworkerCount": self.coworker_count,
            "overCapacityCount": self.over_capacity_count,
        }


def utilization_level(percentage: float) -> str:
    """Classify a utilization percentage for display."""
    if percentage > OVER_CAPACITY_THRESHOLD:
        return "over"
    if percentage > HIGH_UTILIZATION_THRESHOLD:
        return "high"
    return "ok"


def coworker_utilization(
    coworker_id: int, capacity: float, assignments: Iterable[Any]
) -> CoworkerUtilization:
    """Sum the hours assigned to a coworker.

    ``available`` is not clamped: it goes negative when the coworker is
    over-committed.
    """
    capacity = capacity or 0
    assigned = _sum_hours(a for a in assignments if a.coworker_id == coworker_id)
    return CoworkerUtilization(
        coworker_id=coworker_id,
        capacity=capacity,
        assigned_hours=assigned,
        available=capacity - assigned,
        percentage=_percentage(assigned, capacity),
    )


def task_rollup(task_id: int, estimated_hours: float, assignments: Iterable[Any]) -> TaskRollup:
    """Sum the hours assigned to a task; ``remaining`` is floored at zero."""
    estimated_hours = estimated_hours or 0
    matching = [a for a in assignments if a.task_id == task_id]
    total = _sum_hours(matching)
    return TaskRollup(
        task_id=task_id,
        estimated_hours=estimated_hours,
        total_assigned=total,
        remaining=max(0, estimated_hours - total),
        assignment_count=len(matching),
    )


def project_completion_percentage(tasks: Iterable[Any]) -> float:
    """Share of the project's tasks whose status is ``Completed``.

    Counts tasks, not hours: a completed 1-hour task weighs as much as a
    completed 100-hour task.
    """
    tasks = list(tasks)
    completed = sum(1 for task in tasks if task.status == COMPLETED_STATUS)
    return _percentage(completed, len(tasks))


def project_rollup(project_id: int, tasks: Iterable[Any], assignments: Iterable[Any]) -> ProjectRollup:
    project_tasks = [task for task in tasks if task.project_id == project_id]
    task_ids = {task.id for task in project_tasks}
    return ProjectRollup(
        project_id=project_id,
        task_count=len(project_tasks),
        status_counts=dict(Counter(task.status for task in project_tasks)),
        total_estimated_hours=sum((task.estimated_hours or 0) for task in project_tasks),
        total_assigned_hours=_sum_hours(a for a in assignments if a.task_id in task_ids),
        completion_percentage=project_completion_percentage(project_tasks),
    )


def team_summary(coworkers: Iterable[Any], assignments: Iterable[Any]) -> TeamSummary:
    coworkers = list(coworkers)
    assignments = list(assignments)
    utilizations = [
        coworker_utilization(coworker.id, coworker.capacity, assignments) for coworker in coworkers
    ]
    total_capacity = sum(u.capacity for u in utilizations)
    total_assigned = sum(u.assigned_hours for u in utilizations)
    return TeamSummary(
        total_capacity=total_capacity,
        total_assigned=total_assigned,
        utilization_percentage=_percentage(total_assigned, total_capacity),
        coworker_count=len(utilizations),
        over_capacity_count=sum(1 for u in utilizations if u.over_capacity),
    )


def build_dashboard(coworkers, projects, tasks, assignments) -> dict[str, Any]:
    """Compute every rollup shown on the dashboard in a single pass."""
    coworkers = list(coworkers)
    projects = list(projects)
    tasks = list(tasks)
    assignments = list(assignments)
    return {
        "summary": team_summary(coworkers, assignments),
        "coworkers": [
            (coworker, coworker_utilization(coworker.id, coworker.capacity, assignments))
            for coworker in coworkers
        ],
        "projects": [(project, project_rollup(project.id, tasks, assignments)) for project in projects],
        "tasks": [(task, task_rollup(task.id, task.estimated_hours, assignments)) for task in tasks],
    }


__all__ = [
    "CoworkerUtilization",
    "ProjectRollup",
    "TaskRollup",
    "TeamSummary",
    "build_dashboard",
    "coworker_utilization",
    "project_completion_percentage",
    "project_rollup",
    "task_rollup",
    "team_summary",
    "utilization_level",
]
