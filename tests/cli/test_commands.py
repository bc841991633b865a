"""Tests for the linkgnome CLI commands.

This test suite covers:
- The link command in dry-run and linking modes
- Option fallbacks to LINKGNOME_* environment variables
- Date parsing for --before/--after
- Configuration errors and their exit codes
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pytest
import typer
from typer.testing import CliRunner

from linkgnome.cli.commands import ExitCode, _parse_date, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep user config, API keys and .env files out of CLI tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ("TMDB_API_KEY", "LINKGNOME_DESTINATION", "LINKGNOME_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    yield
    logger = logging.getLogger("linkgnome")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def media(tmp_path: Path) -> Path:
    root = tmp_path / "downloads"
    for rel in (
        "Foobar.1999.2160p.WEB-DL.mkv",
        "clobberin.time.s01e01.lets.go.mkv",
        "readme.txt",
    ):
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rel)
    return root


def test_dry_run_creates_nothing(media: Path, tmp_path: Path) -> None:
    dest = tmp_path / "lib"
    result = runner.invoke(app, ["link", str(media), "--dest", str(dest), "--dry-run"])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "2 planned" in result.output
    assert not dest.exists()


def test_link_creates_library(media: Path, tmp_path: Path) -> None:
    dest = tmp_path / "lib"
    result = runner.invoke(app, ["link", str(media), "-d", str(dest)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "2 created" in result.output
    movie = dest / "movies" / "Foobar (1999)" / "Foobar.1999.2160p.WEB-DL.mkv"
    episode = dest / "tv" / "Clobberin Time" / "Season 1" / "Clobberin Time - S01E01 - Lets Go.mkv"
    assert movie.read_text() == "Foobar.1999.2160p.WEB-DL.mkv"
    assert episode.exists()

    again = runner.invoke(app, ["link", str(media), "-d", str(dest)])
    assert again.exit_code == ExitCode.SUCCESS
    assert "2 exists" in again.output


def test_no_tv_and_keep_title_case(media: Path, tmp_path: Path) -> None:
    dest = tmp_path / "lib"
    (media / "the.matrix.1999.mkv").write_text("x")
    result = runner.invoke(
        app, ["link", str(media), "-d", str(dest), "--no-tv", "--keep-title-case"]
    )
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert (dest / "movies" / "the matrix (1999)" / "the.matrix.1999.mkv").exists()
    assert not (dest / "tv").exists()


def test_exclude_pattern(media: Path, tmp_path: Path) -> None:
    dest = tmp_path / "lib"
    result = runner.invoke(app, ["link", str(media), "-d", str(dest), "-x", "(?i)clobberin"])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "1 created" in result.output


def test_destination_from_environment(
    media: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    dest = tmp_path / "env-lib"
    monkeypatch.setenv("LINKGNOME_DESTINATION", str(dest))
    result = runner.invoke(app, ["link", str(media)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert (dest / "movies").is_dir()


def test_missing_destination_is_an_error(media: Path) -> None:
    result = runner.invoke(app, ["link", str(media)])
    assert result.exit_code == ExitCode.ERROR
    assert "no destination" in result.output


def test_bad_date_is_an_error(media: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["link", str(media), "-d", str(tmp_path / "lib"), "--after", "yesterday"]
    )
    assert result.exit_code == ExitCode.ERROR
    assert "invalid date" in result.output


def test_invalid_worker_count_is_an_error(media: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["link", str(media), "-d", str(tmp_path / "lib"), "--workers", "0"]
    )
    assert result.exit_code == ExitCode.ERROR


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "LinkGnome version" in result.output


@pytest.mark.parametrize(
    ("value", "month", "day"),
    [("1/2", 1, 2), ("1-2", 1, 2), ("01/02", 1, 2), ("12/31", 12, 31)],
)
def test_parse_month_day_uses_current_year(value: str, month: int, day: int) -> None:
    parsed = _parse_date(value)
    assert parsed == datetime(datetime.now().year, month, day)


def test_parse_full_date() -> None:
    assert _parse_date("2023-04-05") == datetime(2023, 4, 5)
    assert _parse_date(None) is None


def test_parse_date_rejects_garbage() -> None:
    with pytest.raises(typer.BadParameter):
        _parse_date("13/45")
