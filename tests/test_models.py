from taskboard.config import settings
from taskboard.models import Task, User


def test_tables_live_in_the_configured_schema():
    assert Task.__table__.schema == settings.schema_name
    assert User.__table__.schema == settings.schema_name


def test_task_to_dict():
    task = Task(id=3, title="Buy milk", description="2%")

    assert task.to_dict() == {"id": 3, "title": "Buy milk", "description": "2%"}


def test_user_to_dict_leaves_out_password():
    user = User(
        id=1,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="$2b$12$hash",
    )

    data = user.to_dict()
    assert "password" not in data
    assert data["email"] == "ada@example.com"
