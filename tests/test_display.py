from datetime import datetime, UTC

from app.models.task import TaskStatus
from app.store import demo_tasks
from app.utils.display import format_date, status_label, updated_label


def test_format_date():
    assert format_date(datetime(2024, 1, 15, tzinfo=UTC)) == "Jan 15, 2024"
    assert format_date(datetime(2023, 12, 3, 18, 30, tzinfo=UTC)) == "Dec 3, 2023"


def test_status_label():
    assert status_label(TaskStatus.IN_PROGRESS) == "in progress"
    assert status_label(TaskStatus.PENDING) == "pending"


def test_updated_label_only_when_touched():
    touched, untouched = demo_tasks()
    assert updated_label(touched) == "Jan 16, 2024"
    assert updated_label(untouched) is None
