from datetime import datetime, timedelta, timezone

import pytest

from git_author_stats.author_stats import build_parser
from git_author_stats.errors import ConfigError
from git_author_stats.filters import FilterConfig, config_from_args, parse_datetime


def test_date_only_is_local_midnight():
    dt = parse_datetime("2024-03-05")
    assert dt.tzinfo is not None
    assert dt == datetime(2024, 3, 5).astimezone()
    assert (dt.hour, dt.minute, dt.second) == (0, 0, 0)


def test_date_and_time_without_offset_is_local():
    dt = parse_datetime("2024-03-05 13:14:15")
    assert dt == datetime(2024, 3, 5, 13, 14, 15).astimezone()


def test_date_and_time_with_offset():
    dt = parse_datetime("2024-03-05 13:14:15+0200")
    expected = datetime(2024, 3, 5, 11, 14, 15, tzinfo=timezone.utc)
    assert dt == expected


@pytest.mark.parametrize("value", [
    "2024-03-05T13:14:15Z",
    "2024-03-05T15:14:15+02:00",
])
def test_rfc3339(value):
    assert parse_datetime(value) == datetime(2024, 3, 5, 13, 14, 15,
                                             tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [
    "yesterday",
    "2024/03/05",
    "2024-13-01",
    "2024-03-05T13:14:15",
    "",
])
def test_invalid_time_format(value):
    with pytest.raises(ConfigError, match="invalid time format"):
        parse_datetime(value)


def test_defaults():
    config = FilterConfig()
    assert config.path_globs == ()
    assert not (config.exclude_bots or config.exclude_root or config.exclude_ubuntu)
    assert config.skip_empty
    assert config.sort_field == 'commits'
    assert config.descending


def test_window_bounds_are_inclusive():
    since = datetime(2024, 1, 1, tzinfo=timezone.utc)
    until = datetime(2024, 2, 1, tzinfo=timezone.utc)
    config = FilterConfig(since=since, until=until)

    assert config.in_window(since)
    assert config.in_window(until)
    assert not config.in_window(since - timedelta(seconds=1))
    assert not config.in_window(until + timedelta(seconds=1))


def test_unbounded_window():
    assert FilterConfig().in_window(datetime(1971, 1, 1, tzinfo=timezone.utc))


def test_since_after_until_rejected():
    with pytest.raises(ConfigError):
        FilterConfig(since=datetime(2024, 2, 1, tzinfo=timezone.utc),
                     until=datetime(2024, 1, 1, tzinfo=timezone.utc))


def test_unknown_sort_field_rejected():
    with pytest.raises(ConfigError, match="sort field"):
        FilterConfig(sort_field='lines')

    with pytest.raises(ConfigError, match="sort order"):
        FilterConfig(sort_order='up')


def test_identity_exclusions_are_opt_in():
    config = FilterConfig()
    for name in ['dependabot[bot]', 'root', 'ubuntu']:
        assert not config.excludes_author(name)

    config = FilterConfig(exclude_bots=True, exclude_root=True, exclude_ubuntu=True)
    assert config.excludes_author('dependabot[bot]')
    assert config.excludes_author('root')
    assert config.excludes_author('ubuntu')

    # 'root' and 'ubuntu' are exact matches, dependabot is a substring
    assert not config.excludes_author('rooted')
    assert not config.excludes_author('Ubuntu Maintainer')
    assert not config.excludes_author('Alice')


def test_config_from_args():
    args = build_parser().parse_args(['-m', 'core', '-s', '2024-01-01',
                                      '--no-bot', '--keep-empty',
                                      '--sort-by', 'added', '--order', 'asc',
                                      'src/*.py', 'docs'])
    config = config_from_args(args)

    assert config.module == 'core'
    assert config.path_globs == ('src/*.py', 'docs')
    assert config.since == datetime(2024, 1, 1).astimezone()
    assert config.until is None
    assert config.exclude_bots
    assert not config.exclude_root
    assert not config.skip_empty
    assert config.sort_field == 'added'
    assert not config.descending
