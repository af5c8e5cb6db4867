"""Server-rendered dashboard and detail pages."""
from __future__ import annotations

from flask import Blueprint, abort, flash, render_template, request

from forms import DisplayNameForm
from routes import safe_redirect
from services import entity_service
from services.capacity_service import (
    build_dashboard,
    coworker_utilization,
    project_rollup,
    task_rollup,
)
from services.entity_service import EntityNotFound
from services.viewer_service import (
    COOKIE_MAX_AGE,
    NAME_COOKIE,
    ROLE_COOKIE,
    normalize_user_name,
    parse_role,
    viewer_from_cookies,
)
from models.task import PRIORITY_CHOICES, STATUS_CHOICES

dashboard_bp = Blueprint("dashboard", __name__)


def _viewer():
    return viewer_from_cookies(request.cookies)


def _load_or_404(loader, entity_id: int):
    try:
        return loader(entity_id)
    except EntityNotFound:
        abort(404)


@dashboard_bp.route("/dashboard")
def dashboard():
    context = build_dashboard(
        entity_service.list_coworkers(),
        entity_service.list_projects(),
        entity_service.list_tasks(),
        entity_service.list_assignments(),
    )
    return render_template(
        "dashboard.html",
        viewer=_viewer(),
        summary=context["summary"],
        coworker_rows=context["coworkers"],
        project_rows=context["projects"],
        task_rows=context["tasks"],
        projects=[project for project, _ in context["projects"]],
        coworkers=[coworker for coworker, _ in context["coworkers"]],
        tasks=[task for task, _ in context["tasks"]],
        priority_choices=PRIORITY_CHOICES,
        status_choices=STATUS_CHOICES,
    )


@dashboard_bp.route("/coworkers/<int:coworker_id>")
def coworker_detail(coworker_id: int):
    coworker = _load_or_404(entity_service.get_coworker, coworker_id)
    assignments = list(coworker.assignments)
    return render_template(
        "coworker.html",
        viewer=_viewer(),
        coworker=coworker,
        assignments=assignments,
        utilization=coworker_utilization(coworker.id, coworker.capacity, assignments),
    )


@dashboard_bp.route("/projects/<int:project_id>")
def project_detail(project_id: int):
    project = _load_or_404(entity_service.get_project, project_id)
    tasks = list(project.tasks)
    assignments = [assignment for task in tasks for assignment in task.assignments]
    return render_template(
        "project.html",
        viewer=_viewer(),
        project=project,
        rollup=project_rollup(project.id, tasks, assignments),
        task_rows=[(task, task_rollup(task.id, task.estimated_hours, assignments)) for task in tasks],
    )


@dashboard_bp.route("/tasks/<int:task_id>")
def task_detail(task_id: int):
    task = _load_or_404(entity_service.get_task, task_id)
    assignments = list(task.assignments)
    return render_template(
        "task.html",
        viewer=_viewer(),
        task=task,
        assignments=assignments,
        rollup=task_rollup(task.id, task.estimated_hours, assignments),
        coworkers=entity_service.list_coworkers(),
        projects=entity_service.list_projects(),
        priority_choices=PRIORITY_CHOICES,
        status_choices=STATUS_CHOICES,
    )


@dashboard_bp.route("/assignments/<int:assignment_id>")
def assignment_detail(assignment_id: int):
    assignment = _load_or_404(entity_service.get_assignment, assignment_id)
    coworker = assignment.coworker
    task = assignment.task
    return render_template(
        "assignment.html",
        viewer=_viewer(),
        assignment=assignment,
        utilization=coworker_utilization(coworker.id, coworker.capacity, coworker.assignments),
        rollup=task_rollup(task.id, task.estimated_hours, task.assignments),
        coworkers=entity_service.list_coworkers(),
        tasks=entity_service.list_tasks(),
    )


# Viewer preferences
# ------------------------------
@dashboard_bp.route("/role/<string:role>")
def change_role(role: str):
    """Store the selected role in a browser cookie and go back."""
    response = safe_redirect(request.referrer, "dashboard.dashboard")
    selected = parse_role(role)
    if selected is None:
        flash("Invalid role", "error")
        return response
    response.set_cookie(ROLE_COOKIE, selected.value, max_age=COOKIE_MAX_AGE, samesite="Lax")
    return response


@dashboard_bp.route("/settings/name", methods=["POST"])
def change_user_name():
    """Store the display name used as the default "assigned by" value."""
    response = safe_redirect(request.referrer, "dashboard.dashboard")
    form = DisplayNameForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, "error")
        return response
    name = normalize_user_name(form.userName.data)
    if name:
        response.set_cookie(NAME_COOKIE, name, max_age=COOKIE_MAX_AGE, samesite="Lax")
    else:
        response.delete_cookie(NAME_COOKIE)
    return response
