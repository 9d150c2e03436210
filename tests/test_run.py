"""Tests for the server launcher"""
import pytest

import run


def test_main_exits_when_startup_fails(monkeypatch):
    async def failed_start():
        return False

    monkeypatch.setattr(run, "run_api", failed_start)
    with pytest.raises(SystemExit) as exc_info:
        run.main()
    assert exc_info.value.code == 1


def test_main_returns_after_clean_shutdown(monkeypatch):
    async def clean_run():
        return True

    monkeypatch.setattr(run, "run_api", clean_run)
    run.main()


def test_run_module_does_not_open_the_database():
    assert not hasattr(run, "init_db")
