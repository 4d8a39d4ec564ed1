import logging
import os

from git.exc import InvalidGitRepositoryError, NoSuchPathError

from git_author_stats.errors import RepositoryError
from git_author_stats.git_repo import GitRepo

log_fmt = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity=0):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=log_fmt)


def open_git_repo(directory):
    try:
        return GitRepo(directory)
    except NoSuchPathError:
        raise RepositoryError("no such directory: %s" % directory)
    except InvalidGitRepositoryError:
        raise RepositoryError("not a git repository: %s" %
                              os.path.abspath(directory))
