import logging
import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from git_author_stats.author import AuthorTable
from git_author_stats.errors import AuthorStatsError
from git_author_stats.filters import (config_from_args, datetime_fmts,
                                      rfc3339_desc, sort_fields, sort_orders,
                                      SORT_COMMITS, ORDER_DESC)
from git_author_stats.report import render_report
from git_author_stats.utils import configure_logging, open_git_repo
from git_author_stats.version import version

logger = logging.getLogger(__name__)

desc = 'Print commit, insertion and deletion counts per commit author'
epilog = ('''

Date/time Format
----------------

The following formats are accepted by the --since and --until options, and
are tried in this order (values without an offset are local time):

%s
%s
''' % ('\n'.join([f[1] for f in datetime_fmts]), rfc3339_desc))


def build_parser():
    parser = ArgumentParser(prog='git-author-stats', description=desc,
                            formatter_class=RawDescriptionHelpFormatter,
                            epilog=epilog)

    parser.add_argument('glob', nargs='*',
            help="Only count changes to paths matching these git pathspecs")
    parser.add_argument('-r', '--repository', dest='repository', default='.',
            metavar='PATH', help="Path to git repo directory")
    parser.add_argument('-m', '--module', dest='module', default=None,
            help="Label to print at the start of each row")
    parser.add_argument('-s', '--since', dest='since', default=None,
            metavar='DATETIME', help="Ignore commits older than this")
    parser.add_argument('-u', '--until', dest='until', default=None,
            metavar='DATETIME', help="Ignore commits newer than this")
    parser.add_argument('--no-bot', dest='no_bot', action='store_true',
            help="Exclude commits by dependabot")
    parser.add_argument('--no-root', dest='no_root', action='store_true',
            help="Exclude commits by an author named 'root'")
    parser.add_argument('--no-ubuntu', dest='no_ubuntu', action='store_true',
            help="Exclude commits by an author named 'ubuntu'")
    parser.add_argument('--keep-empty', dest='keep_empty', action='store_true',
            help="Count commits that change no lines in the selected paths")
    parser.add_argument('--walk-paths', dest='walk_paths', action='store_true',
            help="Only visit commits that touch the given globs")
    parser.add_argument('--sort-by', dest='sort_by', default=SORT_COMMITS,
            choices=sort_fields, help="Field to sort rows by (default: %(default)s)")
    parser.add_argument('--order', dest='order', default=ORDER_DESC,
            choices=sort_orders, help="Sort order (default: %(default)s)")
    parser.add_argument('--version', action='version', version=version)
    parser.add_argument('-v', '--verbose', dest='verbose', action='count',
            default=0, help="Log progress to stderr (repeat for more detail)")

    return parser


def collect(repo, config):
    table = AuthorTable()
    return table.extend(repo.commit_records(config))


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = config_from_args(args)
        r = open_git_repo(args.repository)
        logger.info("reading history of %s", r.working_dir)
        lines = render_report(collect(r, config).authors(), config)
    except AuthorStatsError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    for line in lines:
        print(line)

    return 0

if __name__ == "__main__":
    sys.exit(main())
