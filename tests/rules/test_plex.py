"""Tests for the Plex rule set.

This test suite covers:
- Movie and episode target paths, with and without years and titles
- Season folders (Specials for season 0) and multi-episode id rendering
- Planning links under a destination root
"""

from pathlib import Path, PurePosixPath

import pytest

from linkgnome.core.classifier import classify
from linkgnome.models.core import Episode, MediaType, Movie
from linkgnome.rules.base import RuleSet
from linkgnome.rules.plex import PlexRuleSet, format_episode_id, plan_link, season_folder


class TestPlexRuleSet:
    """Tests for the PlexRuleSet class."""

    @pytest.fixture
    def rule_set(self) -> PlexRuleSet:
        """Create a PlexRuleSet for testing."""
        return PlexRuleSet()

    def test_init(self, rule_set: PlexRuleSet) -> None:
        assert rule_set.platform_name == "plex"
        assert rule_set.supports_media_type(MediaType.MOVIE)
        assert rule_set.supports_media_type(MediaType.EPISODE)

    def test_movie_path(self, rule_set: PlexRuleSet) -> None:
        movie = classify("/dl/Foobar.1999.2160p.WEB-DL.mkv")
        assert rule_set.target_path(movie) == PurePosixPath(
            "movies/Foobar (1999)/Foobar.1999.2160p.WEB-DL.mkv"
        )

    def test_movie_without_year(self, rule_set: PlexRuleSet) -> None:
        movie = Movie(source=Path("/dl/x.mkv"), title="Untitled", year=1700)
        assert movie.year is None
        assert rule_set.target_path(movie) == PurePosixPath("movies/Untitled/x.mkv")

    def test_episode_path(self, rule_set: PlexRuleSet) -> None:
        episode = classify("/dl/clobberin.time.s01e01.lets.go.mkv")
        assert rule_set.target_path(episode) == PurePosixPath(
            "tv/Clobberin Time/Season 1/Clobberin Time - S01E01 - Lets Go.mkv"
        )

    def test_multi_episode_special(self, rule_set: PlexRuleSet) -> None:
        episode = classify("/dl/BEASTMODE (2001) - S00E10E11E12.mkv")
        assert rule_set.target_path(episode) == PurePosixPath(
            "tv/BEASTMODE (2001)/Specials/BEASTMODE (2001) - S00E10-E12.mkv"
        )

    def test_missing_series_name(self, rule_set: PlexRuleSet) -> None:
        episode = Episode(source=Path("S02E03.mp4"), episode_id="S02E03", season=2, episode=3)
        assert rule_set.target_path(episode) == PurePosixPath(
            "tv/Unknown Show/Season 2/Unknown Show - S02E03.mp4"
        )

    def test_slashes_never_add_directories(self, rule_set: PlexRuleSet) -> None:
        movie = Movie(source=Path("x.mkv"), title="Face/Off", year=1997)
        assert rule_set.target_path(movie) == PurePosixPath("movies/Face-Off (1997)/x.mkv")

    def test_plan_joins_destination(self, rule_set: PlexRuleSet, tmp_path: Path) -> None:
        movie = Movie(source=tmp_path / "in" / "Foobar.1999.mkv", title="Foobar", year=1999)
        link = rule_set.plan(movie, tmp_path / "lib")
        assert link.source == movie.source
        assert link.target == tmp_path / "lib" / "movies" / "Foobar (1999)" / "Foobar.1999.mkv"
        assert plan_link(movie, tmp_path / "lib") == link


class MovieShelf(RuleSet):
    """Rule set that only places movies, in a flat folder."""

    def __init__(self) -> None:
        super().__init__("shelf")

    def supported_media_types(self) -> list[MediaType]:
        return [MediaType.MOVIE]

    def target_path(self, media) -> PurePosixPath:
        return PurePosixPath(media.source.name)


def test_plan_rejects_unsupported_media_type(tmp_path: Path) -> None:
    shelf = MovieShelf()
    movie = Movie(source=Path("Foobar.1999.mkv"), title="Foobar", year=1999)
    assert shelf.plan(movie, tmp_path).target == tmp_path / "Foobar.1999.mkv"
    episode = Episode(source=Path("s01e01.mkv"), episode_id="s01e01", season=1, episode=1)
    assert not shelf.supports_media_type(episode.kind)
    with pytest.raises(ValueError, match="shelf cannot place episode files"):
        shelf.plan(episode, tmp_path)


def test_entity_target_relative_path() -> None:
    episode = classify("/dl/show.s01e02.mkv")
    assert episode.target_relative_path() == PurePosixPath("tv/Show/Season 1/Show - S01E02.mkv")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("s01e02", "S01E02"),
        ("S01E02E03", "S01E02-E03"),
        ("s01e02-e03", "S01E02-E03"),
        ("S00E10E11E12", "S00E10-E12"),
    ],
)
def test_format_episode_id(raw: str, expected: str) -> None:
    assert format_episode_id(raw) == expected


@pytest.mark.parametrize(
    "path",
    [
        "Show.S00E01.mkv",
        "Show.S01E01.mkv",
        "Show.S10E01E02.mkv",
        "Show (1999) - s0e5.mkv",
    ],
)
def test_specials_folder_iff_season_zero(path: str) -> None:
    episode = classify(path)
    folder = episode.target_relative_path().parts[2]
    assert (folder == "Specials") == (episode.season == 0)
    assert season_folder(episode.season) == folder
