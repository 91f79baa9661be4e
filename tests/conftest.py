import logging
import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.routes.dungeon_api import clear_cache  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _fresh_dungeon_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture()
def restore_root_logging():
    """Snapshot root logger handlers/level and put them back after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for h in list(root.handlers):
            if h not in handlers:
                root.removeHandler(h)
                h.close()
        for h in handlers:
            if h not in root.handlers:
                root.addHandler(h)
        root.setLevel(level)


def _tracked_env(key):
    return key.startswith("DELVE_") or key in ("HOST", "PORT")


@pytest.fixture(autouse=True)
def _isolate_delve_env():
    """Drop any DELVE_*/HOST/PORT variable a test (or load_dotenv) leaves behind."""
    before = {k: v for k, v in os.environ.items() if _tracked_env(k)}
    yield
    for k in [k for k in os.environ if _tracked_env(k)]:
        if k not in before:
            del os.environ[k]
    os.environ.update(before)
