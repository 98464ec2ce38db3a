"""
CLI smoke tests — scripts/booking.py against a throwaway SQLite file.
"""

import importlib.util
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "booking.py")


@pytest.fixture
def script(tmp_path, monkeypatch):
    monkeypatch.setenv("BOOKING_STORAGE", "sqlite")
    monkeypatch.setenv("BOOKING_DB_PATH", str(tmp_path / "booking.db"))
    monkeypatch.setenv("BOOKING_NOTIFY_CHANNEL", "console")
    spec = importlib.util.spec_from_file_location("booking_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cli(script):
    return script.main


def test_log_level_defaults_to_info(script, monkeypatch):
    monkeypatch.delenv("BOOKING_LOG_LEVEL", raising=False)
    assert script._log_level() == "INFO"
    monkeypatch.setenv("BOOKING_LOG_LEVEL", "debug")
    assert script._log_level() == "DEBUG"


def test_lists_seed_catalog(cli, capsys):
    assert cli(["facilities"]) == 0
    out = capsys.readouterr().out
    assert "Auditorium Utama" in out
    assert "Ruang Kelas Multimedia" in out


def test_book_and_approve(cli, capsys):
    assert cli(["login", "user@kampus.ac.id", "user123"]) == 0
    assert cli(["book", "3", "2026-03-10", "09:00", "11:00", "Kelas", "Algoritma"]) == 0
    capsys.readouterr()

    assert cli(["mine"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("All (1)  pending (1)  approved (0)  rejected (0)")
    assert "[pending]" in out
    [row] = [line.split() for line in out.splitlines() if line.split()[1:2] == ["pending"]]
    reservation_id = row[0]

    assert cli(["approve", reservation_id, "Silakan"]) == 1  # not an admin

    assert cli(["logout"]) == 0
    assert cli(["login", "admin@kampus.ac.id", "admin123"]) == 0
    assert cli(["approve", reservation_id, "Silakan"]) == 0
    capsys.readouterr()

    assert cli(["dashboard"]) == 0
    assert "approved  1" in capsys.readouterr().out


def test_bad_date(cli, capsys):
    cli(["login", "user@kampus.ac.id", "user123"])
    assert cli(["book", "3", "10/03/2026", "09:00", "11:00", "Kelas"]) == 1


def test_admin_facility_management(cli, capsys):
    cli(["login", "admin@kampus.ac.id", "admin123"])
    assert cli(["set-status", "2", "maintenance"]) == 0
    assert cli(["set-status", "2", "closed"]) == 1
    assert cli(["delete-facility", "6"]) == 0
    assert cli(["delete-facility", "6"]) == 1
    assert cli(["add-facility", "Studio Musik", "15", "Gedung F"]) == 0
    assert cli(["add-facility", "Gudang", "0", "Gedung G"]) == 1
    capsys.readouterr()

    cli(["facilities"])
    out = capsys.readouterr().out
    assert "Studio Musik" in out
    assert "Ruang Kelas Multimedia" not in out
    assert "maintenance" in out


def test_unknown_command_prints_usage(cli, capsys):
    assert cli(["frobnicate"]) == 1
    assert "Usage" in capsys.readouterr().out


def test_mine_groups_reservations_by_status(cli, capsys):
    cli(["login", "user@kampus.ac.id", "user123"])
    cli(["book", "3", "2026-03-10", "09:00", "11:00", "Kelas"])
    cli(["book", "1", "2026-03-11", "13:00", "15:00", "Seminar"])
    capsys.readouterr()

    assert cli(["mine"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "All (2)  pending (2)  approved (0)  rejected (0)"
    assert "[approved]" not in out
    assert "Lab Komputer" in out
    assert "Auditorium Utama" in out


def test_admin_command_refusal_goes_through_notifier(cli, capsys):
    cli(["login", "user@kampus.ac.id", "user123"])
    capsys.readouterr()

    assert cli(["dashboard"]) == 1
    assert cli(["pending"]) == 1
    out = capsys.readouterr().out
    assert out.count("[warn] Only administrators can do that.") == 2
