"""Point the app at a throwaway SQLite database before ``app`` is imported.

Flask-SQLAlchemy creates its engine when the app module is imported, so the
URI has to be in the environment first. Set TEST_DATABASE_URL to run the
suite against another database.
"""

import os
import tempfile

_fd, TEST_DATABASE_PATH = tempfile.mkstemp(prefix="teamcapacity_test_", suffix=".db")
os.close(_fd)

os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL") or f"sqlite:///{TEST_DATABASE_PATH}"
os.environ.setdefault("TEAMCAPACITY_ENV", "development")


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(TEST_DATABASE_PATH):
        os.unlink(TEST_DATABASE_PATH)
