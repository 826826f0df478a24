"""Tests for the command line entry point."""

from __future__ import annotations

import pytest

from cloudhub.cli import create_parser, main
from cloudhub.services.auth import login

pytestmark = pytest.mark.usefixtures("api_db")


def test_init_db(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["init-db"]) == 0
    assert "Database ready" in capsys.readouterr().out


def test_create_admin_twice(capsys: pytest.CaptureFixture[str]) -> None:
    args = ["create-admin", "--email", "boss@uni.edu", "--password", "Boss#2024"]

    assert main(args) == 0
    assert main(args) == 0

    out = capsys.readouterr().out
    assert "Created admin account boss@uni.edu" in out
    assert "already exists" in out
    assert login("boss@uni.edu", "Boss#2024").dashboard == "admin-dashboard"


def test_create_admin_invalid_email(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["create-admin", "--email", "nope", "--password", "x"]) == 1
    assert "Error" in capsys.readouterr().err


def test_serve_defaults() -> None:
    args = create_parser().parse_args(["serve"])

    assert (args.host, args.port, args.reload) == ("127.0.0.1", 8000, False)
