import logging
from collections import namedtuple
from datetime import datetime

from git_author_stats.errors import ConfigError

logger = logging.getLogger(__name__)

datetime_fmts = [
    ('%Y-%m-%d', 'YYYY-MM-DD'),
    ('%Y-%m-%d %H:%M:%S', 'YYYY-MM-DD HH:MM:SS'),
    ('%Y-%m-%d %H:%M:%S%z', 'YYYY-MM-DD HH:MM:SS+HH:MM'),
]

rfc3339_desc = 'YYYY-MM-DDTHH:MM:SS+HH:MM (RFC 3339)'

SORT_NAME = 'name'
SORT_EMAIL = 'email'
SORT_COMMITS = 'commits'
SORT_ADDED = 'added'
SORT_DELETED = 'deleted'

sort_fields = [SORT_NAME, SORT_EMAIL, SORT_COMMITS, SORT_ADDED, SORT_DELETED]

ORDER_ASC = 'asc'
ORDER_DESC = 'desc'

sort_orders = [ORDER_ASC, ORDER_DESC]

BOT_MARKER = 'dependabot'
ROOT_NAME = 'root'
UBUNTU_NAME = 'ubuntu'


def _parse_rfc3339(datestr):
    s = datestr.strip()
    if s[-1:] in ('Z', 'z'):
        s = s[:-1] + '+00:00'

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None

    # RFC 3339 always carries an offset
    if dt.tzinfo is None:
        return None

    return dt


def parse_datetime(datestr):
    """
    Parse a --since/--until value into a timezone-aware datetime in local time.
    Formats are tried in the order listed in 'datetime_fmts', then RFC 3339.
    Values without an offset are taken as local time.
    """
    parsed = None

    for fmt, _ in datetime_fmts:
        try:
            dt = datetime.strptime(datestr, fmt)
        except ValueError:
            pass
        else:
            parsed = dt
            break

    if parsed is None:
        parsed = _parse_rfc3339(datestr)

    if parsed is None:
        raise ConfigError("invalid time format: %s" % datestr)

    return parsed.astimezone()


_FilterConfigBase = namedtuple('_FilterConfigBase', [
    'path_globs', 'since', 'until', 'exclude_bots', 'exclude_root',
    'exclude_ubuntu', 'skip_empty', 'walk_paths', 'sort_field',
    'sort_order', 'module'
], defaults=[(), None, None, False, False, False, True, False,
             SORT_COMMITS, ORDER_DESC, None])


class FilterConfig(_FilterConfigBase):
    """
    Immutable set of options for one run.

    Exclusion flags are opt-in: dependabot, 'root' and 'ubuntu' commits are
    counted unless the matching exclude_* flag is set. Commits whose diff is
    empty after path filtering are skipped unless skip_empty is False.
    """
    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        self = super(FilterConfig, cls).__new__(cls, *args, **kwargs)

        if self.sort_field not in sort_fields:
            raise ConfigError("unrecognized sort field '%s' (expected one of: %s)"
                              % (self.sort_field, ', '.join(sort_fields)))

        if self.sort_order not in sort_orders:
            raise ConfigError("unrecognized sort order '%s' (expected one of: %s)"
                              % (self.sort_order, ', '.join(sort_orders)))

        if (self.since is not None) and (self.until is not None):
            if self.since > self.until:
                raise ConfigError("--since (%s) is later than --until (%s)"
                                  % (self.since.isoformat(), self.until.isoformat()))

        return self

    @property
    def descending(self):
        return self.sort_order == ORDER_DESC

    def in_window(self, timestamp):
        if (self.since is not None) and (timestamp < self.since):
            return False

        if (self.until is not None) and (timestamp > self.until):
            return False

        return True

    def excludes_author(self, name):
        if self.exclude_bots and (BOT_MARKER in name):
            return True

        if self.exclude_root and (name == ROOT_NAME):
            return True

        if self.exclude_ubuntu and (name == UBUNTU_NAME):
            return True

        return False


def config_from_args(args):
    """Build a FilterConfig from parsed command-line arguments"""
    since = parse_datetime(args.since) if args.since is not None else None
    until = parse_datetime(args.until) if args.until is not None else None

    config = FilterConfig(path_globs=tuple(args.glob),
                          since=since,
                          until=until,
                          exclude_bots=args.no_bot,
                          exclude_root=args.no_root,
                          exclude_ubuntu=args.no_ubuntu,
                          skip_empty=not args.keep_empty,
                          walk_paths=args.walk_paths,
                          sort_field=args.sort_by,
                          sort_order=args.order,
                          module=args.module)

    logger.debug("filter config: %s", config)
    return config
