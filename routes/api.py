"""REST API for coworkers, projects, tasks and assignments."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from flask import Blueprint, abort, jsonify, url_for
from sqlalchemy.exc import SQLAlchemyError

from database import db
from forms import ApiForm, AssignmentForm, CoworkerForm, ProjectForm, TaskForm
from routes import bind_api_form, json_error, read_json_object
from services import entity_service
from services.capacity_service import (
    build_dashboard,
    coworker_utilization,
    project_rollup,
    task_rollup,
)
from services.entity_service import EntityNotFound, serialize_entity

api_bp = Blueprint("api", __name__, url_prefix="/api")

INVALID_BODY_MESSAGE = "Request body must be a JSON object."


@dataclass(frozen=True)
class Resource:
    """CRUD operations exposed for one record type."""

    form: type[ApiForm]
    list: Callable
    get: Callable
    create: Callable
    update: Callable
    delete: Callable


RESOURCES: dict[str, Resource] = {
    "coworkers": Resource(
        form=CoworkerForm,
        list=entity_service.list_coworkers,
        get=entity_service.get_coworker,
        create=entity_service.create_coworker,
        update=entity_service.update_coworker,
        delete=entity_service.delete_coworker,
    ),
    "projects": Resource(
        form=ProjectForm,
        list=entity_service.list_projects,
        get=entity_service.get_project,
        create=entity_service.create_project,
        update=entity_service.update_project,
        delete=entity_service.delete_project,
    ),
    "tasks": Resource(
        form=TaskForm,
        list=entity_service.list_tasks,
        get=entity_service.get_task,
        create=entity_service.create_task,
        update=entity_service.update_task,
        delete=entity_service.delete_task,
    ),
    "assignments": Resource(
        form=AssignmentForm,
        list=entity_service.list_assignments,
        get=entity_service.get_assignment,
        create=entity_service.create_assignment,
        update=entity_service.update_assignment,
        delete=entity_service.delete_assignment,
    ),
}


def _resource_or_404(resource: str) -> Resource:
    handler = RESOURCES.get(resource)
    if handler is None:
        abort(404)
    return handler


def _persistence_error(action: str, resource: str):
    db.session.rollback()
    logging.exception("Unable to %s %s", action, resource)
    return json_error(message=f"Unable to {action} {resource}.", status=500)


def _validated_fields(handler: Resource):
    """Return ``(fields, None)`` for a valid body or ``(None, response)``."""
    payload = read_json_object()
    if payload is None:
        return None, json_error({"body": [INVALID_BODY_MESSAGE]})
    form = bind_api_form(handler.form, payload)
    if not form.validate():
        return None, json_error(form.errors)
    return form.entity_fields(), None


@api_bp.errorhandler(EntityNotFound)
def handle_not_found(error: EntityNotFound):
    return "", 404


@api_bp.errorhandler(404)
def handle_unknown_route(error):
    return "", 404


@api_bp.route("/<string:resource>", methods=["GET"])
def list_entities(resource: str):
    handler = _resource_or_404(resource)
    return jsonify([serialize_entity(entity) for entity in handler.list()])


@api_bp.route("/<string:resource>/<int:entity_id>", methods=["GET"])
def get_entity(resource: str, entity_id: int):
    handler = _resource_or_404(resource)
    return jsonify(serialize_entity(handler.get(entity_id)))


@api_bp.route("/<string:resource>", methods=["POST"])
def create_entity(resource: str):
    handler = _resource_or_404(resource)
    fields, error_response = _validated_fields(handler)
    if error_response is not None:
        return error_response
    try:
        entity = handler.create(fields)
    except SQLAlchemyError:
        return _persistence_error("create", resource)
    response = jsonify(serialize_entity(entity))
    response.status_code = 201
    response.headers["Location"] = url_for("api.get_entity", resource=resource, entity_id=entity.id)
    return response


@api_bp.route("/<string:resource>/<int:entity_id>", methods=["PUT"])
def update_entity(resource: str, entity_id: int):
    handler = _resource_or_404(resource)
    # Unknown ids are reported before the payload is looked at.
    handler.get(entity_id)
    fields, error_response = _validated_fields(handler)
    if error_response is not None:
        return error_response
    try:
        entity = handler.update(entity_id, fields)
    except SQLAlchemyError:
        return _persistence_error("update", resource)
    return jsonify(serialize_entity(entity))


@api_bp.route("/<string:resource>/<int:entity_id>", methods=["DELETE"])
def delete_entity(resource: str, entity_id: int):
    handler = _resource_or_404(resource)
    try:
        handler.delete(entity_id)
    except SQLAlchemyError:
        return _persistence_error("delete", resource)
    return "", 204


# Rollups
# ------------------------------
@api_bp.route("/coworkers/<int:coworker_id>/utilization", methods=["GET"])
def get_coworker_utilization(coworker_id: int):
    coworker = entity_service.get_coworker(coworker_id)
    utilization = coworker_utilization(coworker.id, coworker.capacity, coworker.assignments)
    return jsonify(utilization.to_dict())


@api_bp.route("/tasks/<int:task_id>/rollup", methods=["GET"])
def get_task_rollup(task_id: int):
    task = entity_service.get_task(task_id)
    return jsonify(task_rollup(task.id, task.estimated_hours, task.assignments).to_dict())


@api_bp.route("/projects/<int:project_id>/rollup", methods=["GET"])
def get_project_rollup(project_id: int):
    project = entity_service.get_project(project_id)
    assignments = [assignment for task in project.tasks for assignment in task.assignments]
    return jsonify(project_rollup(project.id, project.tasks, assignments).to_dict())


@api_bp.route("/dashboard", methods=["GET"])
def get_dashboard():
    dashboard = build_dashboard(
        entity_service.list_coworkers(),
        entity_service.list_projects(),
        entity_service.list_tasks(),
        entity_service.list_assignments(),
    )
    return jsonify(
        {
            "summary": dashboard["summary"].to_dict(),
            "coworkers": [
                {"coworker": coworker.to_dict(), "utilization": utilization.to_dict()}
                for coworker, utilization in dashboard["coworkers"]
            ],
            "projects": [
                {"project": project.to_dict(), "rollup": rollup.to_dict()}
                for project, rollup in dashboard["projects"]
            ],
            "tasks": [
                {"task": task.to_dict(), "rollup": rollup.to_dict()}
                for task, rollup in dashboard["tasks"]
            ],
        }
    )
