from datetime import datetime, timezone
import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, redirect, url_for
from flask_cors import CORS
from flask_migrate import Migrate, upgrade

from database import db
from utils.datetimes import format_iso_datetime

load_dotenv()

DEVELOPMENT = "development"
DEFAULT_DEV_ORIGINS = (
    "http://localhost:3000",
    "https://localhost:3000",
    "http://localhost:3001",
    "https://localhost:3001",
)


def _split_origins(raw_value, default=()):
    if raw_value is None:
        return list(default)
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize Flask app
app = Flask(__name__)
app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get(
    "DATABASE_URL", "sqlite:///teamcapacity.db"
)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-only-change-me")
app.config["APP_ENV"] = os.environ.get("TEAMCAPACITY_ENV", DEVELOPMENT).strip().lower()
app.config["API_BASE_URL"] = (
    os.environ.get("API_BASE_URL") or "http://localhost:5000"
).rstrip("/")
app.config["CORS_DEV_ORIGINS"] = _split_origins(
    os.environ.get("CORS_DEV_ORIGINS"), DEFAULT_DEV_ORIGINS
)
app.config["CORS_PROD_ORIGINS"] = _split_origins(os.environ.get("CORS_PROD_ORIGINS"))
app.json.sort_keys = False

db.init_app(app)

# Models import should be after initializing db
from models.coworker import Coworker
from models.project import Project
from models.task import Task
from models.assignment import Assignment

from forms import DisplayNameForm
from routes.api import api_bp
from routes.dashboard import dashboard_bp

# Create flask command lines to update the db based on the model
# Useage:
# Create a migration script in ./migrations/versions
# > flask db migrate -m "Update comments"
# Run the update
# > flask db upgrade
migrate = Migrate(app, db)
app.register_blueprint(api_bp)
app.register_blueprint(dashboard_bp)


def cors_origins(config) -> list[str]:
    """Return the CORS allow-list for the configured environment."""
    if config.get("APP_ENV") == DEVELOPMENT:
        return list(config.get("CORS_DEV_ORIGINS") or [])
    return list(config.get("CORS_PROD_ORIGINS") or [])


CORS(app, resources={r"/api/*": {"origins": cors_origins(app.config)}})


def apply_startup_migrations(flask_app) -> bool:
    """Upgrade the schema to the latest revision.

    Failures are logged and swallowed; the app keeps running against
    whatever schema is already in place.
    """
    try:
        with flask_app.app_context():
            upgrade()
    except Exception:
        flask_app.logger.exception("Migration error; continuing with the existing schema")
        return False
    return True


@app.context_processor
def inject_forms():
    """Injects forms and client settings into every template."""
    return {
        "name_form": DisplayNameForm(),
        "api_base_url": app.config["API_BASE_URL"],
    }


def hours(value):
    if value is None:
        return ""
    return f"{value:g}"


def dateformat(value, format="%Y-%m-%d %H:%M"):
    if value is None:
        return ""
    return value.strftime(format)


app.jinja_env.filters["hours"] = hours
app.jinja_env.filters["dateformat"] = dateformat


# Home
# ------------------------------
@app.route("/")
def home():
    return redirect(url_for("dashboard.dashboard"))


# Health
# ------------------------------
@app.route("/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/status")
def api_status():
    return jsonify({"status": "ok", "now": format_iso_datetime(datetime.now(timezone.utc))})


# Application Execution
# ------------------------------
if __name__ == "__main__":
    if app.config["APP_ENV"] == DEVELOPMENT:
        apply_startup_migrations(app)
    app.run(debug=app.config["APP_ENV"] == DEVELOPMENT)
