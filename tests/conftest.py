from pathlib import Path
import os
import sys
import pytest

# Run Qt headless when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure src/ is on sys.path for direct test invocation without an editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from week_planner.database_manager import DBConfig, DatabaseManager
from week_planner.models import Activity, new_activity_id


@pytest.fixture()
def db(tmp_path: Path):
    config = DBConfig(path=tmp_path / "test.sqlite")
    manager = DatabaseManager(config)
    manager.init_db()
    yield manager
    manager.close()


def make_activity(day: str, start: str, end: str, title: str = "Block", **kwargs) -> Activity:
    return Activity(id=new_activity_id(), title=title, day=day, start_time=start, end_time=end, **kwargs)


@pytest.fixture()
def activity_factory():
    return make_activity
