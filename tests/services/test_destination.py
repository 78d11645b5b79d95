import io
import os
import re
from datetime import datetime

import pytest
from rich.console import Console

from dbexport.errors import DirectoryCreationFailed
from dbexport.services.destination import (
    DestinationSelector,
    PlatformLocations,
    WindowsLocations,
    build_directory_name,
)


class DummyLogger:
    def info(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


def _denying_makedirs(denied_bases, calls):
    def fake_makedirs(path, exist_ok=False):
        calls.append(path)
        if os.path.dirname(path) in denied_bases:
            raise PermissionError(13, "Permission denied", path)
        os.makedirs(path, exist_ok=exist_ok)

    return fake_makedirs


def test_build_directory_name_uses_fixed_width_timestamp():
    name = build_directory_name(datetime(2025, 8, 5, 13, 25, 0))

    assert name == "dbbackup-20250805132500-qos-bigmenu"
    assert re.fullmatch(r"dbbackup-\d{14}-qos-bigmenu", build_directory_name())


def test_select_prefers_primary_candidate(tmp_path):
    primary = tmp_path / "primary"
    fallback = tmp_path / "fallback"
    primary.mkdir()
    fallback.mkdir()
    calls = []
    selector = DestinationSelector(DummyLogger(), DummyConsole(), makedirs=_denying_makedirs(set(), calls))

    destination = selector.select([str(primary), str(fallback)], lambda: "dbbackup-1-qos-bigmenu")

    assert destination.path == str(primary / "dbbackup-1-qos-bigmenu")
    assert destination.created is True
    assert calls == [str(primary / "dbbackup-1-qos-bigmenu")]
    assert not (fallback / "dbbackup-1-qos-bigmenu").exists()


def test_select_falls_back_when_primary_is_denied(tmp_path):
    primary = tmp_path / "readonly"
    fallback = tmp_path / "Desktop"
    primary.mkdir()
    fallback.mkdir()
    calls = []
    selector = DestinationSelector(
        DummyLogger(),
        DummyConsole(),
        makedirs=_denying_makedirs({str(primary)}, calls),
    )

    destination = selector.select([str(primary), str(fallback)], lambda: "dbbackup-2-qos-bigmenu")

    assert destination.path == str(fallback / "dbbackup-2-qos-bigmenu")
    assert os.path.isdir(destination.path)
    assert len(calls) == 2


def test_select_raises_when_every_candidate_fails(tmp_path):
    primary = tmp_path / "a"
    fallback = tmp_path / "b"
    selector = DestinationSelector(
        DummyLogger(),
        DummyConsole(),
        makedirs=_denying_makedirs({str(primary), str(fallback)}, []),
    )

    with pytest.raises(DirectoryCreationFailed) as error:
        selector.select([str(primary), str(fallback)], lambda: "dbbackup-3-qos-bigmenu")

    assert str(primary / "dbbackup-3-qos-bigmenu") in str(error.value)
    assert str(fallback / "dbbackup-3-qos-bigmenu") in str(error.value)


def test_select_computes_name_once_for_all_candidates(tmp_path):
    names = iter(["dbbackup-first-qos-bigmenu", "dbbackup-second-qos-bigmenu"])
    primary = tmp_path / "a"
    fallback = tmp_path / "b"
    fallback.mkdir()
    calls = []
    selector = DestinationSelector(
        DummyLogger(),
        DummyConsole(),
        makedirs=_denying_makedirs({str(primary)}, calls),
    )

    destination = selector.select([str(primary), str(fallback)], lambda: next(names))

    assert os.path.basename(destination.path) == "dbbackup-first-qos-bigmenu"
    assert [os.path.basename(path) for path in calls] == ["dbbackup-first-qos-bigmenu"] * 2


def test_select_creates_missing_parents_and_tolerates_existing(tmp_path):
    base = tmp_path / "nested" / "backups"
    selector = DestinationSelector(DummyLogger(), DummyConsole())

    first = selector.select([str(base)], lambda: "dbbackup-4-qos-bigmenu")
    second = selector.select([str(base)], lambda: "dbbackup-4-qos-bigmenu")

    assert first.created is True
    assert second.created is False
    assert first.path == second.path


def test_fallback_base_prefers_desktop(tmp_path):
    (tmp_path / "Desktop").mkdir()

    locations = PlatformLocations(cwd="/work", home=str(tmp_path))

    assert locations.candidates() == ["/work", str(tmp_path / "Desktop")]


def test_fallback_base_uses_home_without_desktop(tmp_path):
    locations = PlatformLocations(cwd="/work", home=str(tmp_path))

    assert locations.fallback_base() == str(tmp_path)


def test_primary_base_defaults_to_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert PlatformLocations().primary_base() == os.getcwd()


def test_windows_locations_prefer_onedrive_desktop(tmp_path, monkeypatch):
    onedrive = tmp_path / "OneDrive"
    (onedrive / "Desktop").mkdir(parents=True)
    (tmp_path / "Desktop").mkdir()
    monkeypatch.setenv("OneDrive", str(onedrive))

    locations = WindowsLocations(cwd="C:/work", home=str(tmp_path))

    assert locations.fallback_base() == str(onedrive / "Desktop")


def test_select_announces_bracketed_paths_literally(tmp_path):
    primary = tmp_path / "denied[/a]"
    fallback = tmp_path / "backups[/old]"
    fallback.mkdir()
    output = io.StringIO()
    selector = DestinationSelector(
        DummyLogger(),
        Console(file=output, width=300),
        makedirs=_denying_makedirs({str(primary)}, []),
    )

    destination = selector.select([str(primary), str(fallback)], lambda: "dbbackup-5-qos-bigmenu")

    assert destination.path == str(fallback / "dbbackup-5-qos-bigmenu")
    assert "denied[/a]" in output.getvalue()
    assert "backups[/old]" in output.getvalue()
