"""Create, read, update and delete helpers for the capacity planning records.

Every mutating helper commits immediately. Callers handle ``SQLAlchemyError``
and roll the session back; nothing here retries.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy.orm import selectinload

from database import db
from models.assignment import Assignment
from models.coworker import Coworker
from models.project import Project
from models.task import Task

# Fields of the related rows embedded in assignment responses.
EMBEDDED_COWORKER_FIELDS = ("id", "name", "capacity", "isActive")
EMBEDDED_TASK_FIELDS = (
    "id",
    "name",
    "projectId",
    "priority",
    "status",
    "estimatedHours",
    "weeklyEffort",
    "added",
    "completed",
    "note",
)


class EntityNotFound(LookupError):
    """Raised when a record with the requested id does not exist."""

    def __init__(self, model, entity_id):
        super().__init__(f"{model.__name__} {entity_id} not found")
        self.model = model
        self.entity_id = entity_id


# SQLite INTEGER bounds; larger Python ints raise OverflowError on bind.
MAX_ENTITY_ID = 2**63 - 1
MIN_ENTITY_ID = -(2**63)


def _storable_id(entity_id: int) -> bool:
    return MIN_ENTITY_ID <= entity_id <= MAX_ENTITY_ID


def _get_or_raise(model, entity_id: int):
    if not _storable_id(entity_id):
        raise EntityNotFound(model, entity_id)
    entity = db.session.get(model, entity_id)
    if entity is None:
        raise EntityNotFound(model, entity_id)
    return entity


def _create(model, fields: dict[str, Any]):
    entity = model(**fields)
    db.session.add(entity)
    db.session.commit()
    return entity


def _update(model, entity_id: int, fields: dict[str, Any]):
    entity = _get_or_raise(model, entity_id)
    for attribute in model.UPDATABLE_FIELDS:
        if attribute in fields:
            setattr(entity, attribute, fields[attribute])
    db.session.commit()
    return entity


def _delete(model, entity_id: int) -> None:
    entity = _get_or_raise(model, entity_id)
    db.session.delete(entity)
    db.session.commit()


# Coworkers
# ------------------------------
def list_coworkers() -> list[Coworker]:
    return Coworker.query.all()


def get_coworker(coworker_id: int) -> Coworker:
    return _get_or_raise(Coworker, coworker_id)


def create_coworker(fields: dict[str, Any]) -> Coworker:
    return _create(Coworker, fields)


def update_coworker(coworker_id: int, fields: dict[str, Any]) -> Coworker:
    """Copy name and capacity onto the coworker; ``is_active`` is left untouched."""
    return _update(Coworker, coworker_id, fields)


def delete_coworker(coworker_id: int) -> None:
    _delete(Coworker, coworker_id)


# Projects
# ------------------------------
def list_projects() -> list[Project]:
    return Project.query.all()


def get_project(project_id: int) -> Project:
    return _get_or_raise(Project, project_id)


def create_project(fields: dict[str, Any]) -> Project:
    return _create(Project, fields)


def update_project(project_id: int, fields: dict[str, Any]) -> Project:
    return _update(Project, project_id, fields)


def delete_project(project_id: int) -> None:
    _delete(Project, project_id)


# Tasks
# ------------------------------
def list_tasks() -> list[Task]:
    return Task.query.all()


def get_task(task_id: int) -> Task:
    return _get_or_raise(Task, task_id)


def create_task(fields: dict[str, Any]) -> Task:
    return _create(Task, fields)


def update_task(task_id: int, fields: dict[str, Any]) -> Task:
    return _update(Task, task_id, fields)


def delete_task(task_id: int) -> None:
    _delete(Task, task_id)


# Assignments
# ------------------------------
def _assignment_query():
    return Assignment.query.options(
        selectinload(Assignment.coworker),
        selectinload(Assignment.task),
    )


def list_assignments() -> list[Assignment]:
    return _assignment_query().all()


def get_assignment(assignment_id: int) -> Assignment:
    if not _storable_id(assignment_id):
        raise EntityNotFound(Assignment, assignment_id)
    assignment = _assignment_query().filter(Assignment.id == assignment_id).one_or_none()
    if assignment is None:
        raise EntityNotFound(Assignment, assignment_id)
    return assignment


def create_assignment(fields: dict[str, Any]) -> Assignment:
    return _create(Assignment, fields)


def update_assignment(assignment_id: int, fields: dict[str, Any]) -> Assignment:
    return _update(Assignment, assignment_id, fields)


def delete_assignment(assignment_id: int) -> None:
    _delete(Assignment, assignment_id)


# Serialization
# ------------------------------
def _project(payload: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    return {field: payload.get(field) for field in fields}


def serialize_assignment(assignment: Assignment) -> dict[str, Any]:
    """Return the assignment with its coworker and task embedded.

    The nested objects carry a fixed field list and never include their own
    assignments, which keeps the payload acyclic.
    """
    payload = assignment.to_dict()
    coworker = assignment.coworker
    task = assignment.task
    payload["coworker"] = (
        _project(coworker.to_dict(), EMBEDDED_COWORKER_FIELDS) if coworker is not None else None
    )
    payload["taskItem"] = _project(task.to_dict(), EMBEDDED_TASK_FIELDS) if task is not None else None
    return payload


def serialize_entity(entity) -> dict[str, Any]:
    if isinstance(entity, Assignment):
        return serialize_assignment(entity)
    return entity.to_dict()
