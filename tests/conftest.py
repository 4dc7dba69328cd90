import os
import tempfile

import pytest

# banco temporário antes de importar app/models
_DB_DIR = tempfile.mkdtemp(prefix="slots-test-")
os.environ["SLOTS_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("SLOTS_MAX_SIMULATED_PLAYS", "50000")


@pytest.fixture()
def client():
    from app import app

    app.config.update(TESTING=True)
    with app.test_client() as c:
        yield c
