"""Tests for the core models module."""

import json
from pathlib import Path

import pytest
from pydantic import TypeAdapter, ValidationError

from linkgnome.models.core import (
    Episode,
    Link,
    LinkStatus,
    MediaEntity,
    MediaType,
    Movie,
)
from linkgnome.models.options import LinkOptions


class TestMediaType:
    """Tests for the MediaType enum."""

    def test_enum_values(self) -> None:
        assert MediaType.MOVIE.value == "movie"
        assert MediaType.EPISODE.value == "episode"

    def test_serialization(self) -> None:
        movie = Movie(source=Path("/tmp/a.mkv"), title="A", year=2000)
        parsed = json.loads(movie.model_dump_json())
        assert parsed["kind"] == "movie"


class TestMediaEntity:
    """Tests for the tagged Movie/Episode variant."""

    def test_discriminated_validation(self) -> None:
        adapter = TypeAdapter(MediaEntity)
        media = adapter.validate_python(
            {"kind": "episode", "source": "/tmp/s01e01.mkv", "episode_id": "s01e01"}
        )
        assert isinstance(media, Episode)
        media = adapter.validate_python({"kind": "movie", "source": "/tmp/a.mkv"})
        assert isinstance(media, Movie)

    def test_source_is_frozen(self) -> None:
        movie = Movie(source=Path("/tmp/a.mkv"), title="A", year=2000)
        with pytest.raises(ValidationError):
            movie.source = Path("/tmp/b.mkv")

    def test_resolved_fields_are_writable(self) -> None:
        movie = Movie(source=Path("/tmp/a.mkv"), title="A", year=2000)
        movie.title = "A Canonical"
        movie.tmdb_id = 42
        assert movie.title == "A Canonical"
        assert movie.source_path == str(Path("/tmp/a.mkv"))

    @pytest.mark.parametrize("year", [0, 1066, 1887])
    def test_implausible_movie_year_is_unset(self, year: int) -> None:
        assert Movie(source=Path("a.mkv"), title="A", year=year).year is None

    def test_first_film_year_is_kept(self) -> None:
        assert Movie(source=Path("a.mkv"), title="A", year=1888).year == 1888

    def test_episode_defaults(self) -> None:
        episode = Episode(source=Path("a.mkv"), episode_id="s00e01", season=0, episode=1)
        assert episode.is_special
        assert episode.title is None
        assert episode.countries == []


def test_link_is_frozen() -> None:
    link = Link(source=Path("a"), target=Path("b"))
    with pytest.raises(ValidationError):
        link.target = Path("c")


def test_link_status_values() -> None:
    assert {s.value for s in LinkStatus} == {"created", "exists", "failed", "planned"}


class TestLinkOptions:
    """Tests for LinkOptions normalisation and validation."""

    def test_defaults(self, tmp_path: Path) -> None:
        options = LinkOptions(destination=tmp_path)
        assert options.sources == [Path("./")]
        assert options.extensions == {"avi", "mkv", "mp4"}
        assert options.api_key is None

    def test_extensions_and_countries_are_normalised(self, tmp_path: Path) -> None:
        options = LinkOptions(
            destination=tmp_path, extensions={".MKV", "Mp4"}, exclude_countries={"JP"}
        )
        assert options.extensions == {"mkv", "mp4"}
        assert options.exclude_countries == {"jp"}

    @pytest.mark.parametrize("field", ["rate_limit", "burst", "workers"])
    def test_limits_must_be_positive(self, tmp_path: Path, field: str) -> None:
        with pytest.raises(ValidationError):
            LinkOptions(destination=tmp_path, **{field: 0})
