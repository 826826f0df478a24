from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import cloudhub.data.db as app_db
from cloudhub.data.db import init_db
from cloudhub.services.account_status import update_account_status
from cloudhub.services.auth import ensure_admin, signup

PASSWORD = "Secret#123"


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Use a temporary SQLite DB and storage directory."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    storage_root = tmp_path / "storage"
    monkeypatch.setenv("CLOUDHUB_STORAGE_DIR", storage_root.as_posix())
    monkeypatch.delenv("CLOUDHUB_API_TOKEN", raising=False)
    monkeypatch.delenv("CLOUDHUB_PUBLIC_BASE_URL", raising=False)
    app_db.reset_engine()
    init_db()
    yield
    # Dispose engine to release connections
    app_db.reset_engine()


@pytest.fixture
def create_account(api_db: None) -> Callable[..., dict]:
    """Factory creating an account through signup, then applying a status."""
    counter = {"n": 0}

    def _create(
        email: str,
        role: str = "student",
        status: str = "approved",
        full_name: str | None = None,
        department: str = "Computer Science",
        year_semester: str = "3rd Year - Sem 5",
        roll_no: str | None = None,
    ) -> dict:
        if role == "admin":
            user, _ = ensure_admin(email, PASSWORD, full_name or "Admin User")
            return user

        counter["n"] += 1
        data = {
            "email": email,
            "password": PASSWORD,
            "full_name": full_name or email.split("@")[0].title(),
            "role": role,
            "department": department,
            "year_semester": year_semester,
        }
        if role == "student":
            data["roll_no"] = roll_no or f"CS{counter['n']:04d}"
        else:
            data["designation"] = "Assistant Professor"
        user = signup(data)
        if status != "pending":
            user, _ = update_account_status(email, status)
        return user

    return _create


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically add api_db fixture to tests in API test files."""
    for item in items:
        # Check if test file name contains "api" (case-insensitive)
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            # Automatically add the api_db fixture using usefixtures marker
            item.add_marker(pytest.mark.usefixtures("api_db"))
            # Markers added after collection are not resolved into fixtures,
            # so register the fixture name on the item directly.
            if "api_db" not in item.fixturenames:
                item.fixturenames.insert(0, "api_db")
