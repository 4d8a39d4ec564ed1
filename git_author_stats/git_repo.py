import logging
import re
from collections import namedtuple
from datetime import datetime

from git import Repo
from git.exc import GitCommandError

from git_author_stats.errors import RepositoryError

logger = logging.getLogger(__name__)

_contact_re = re.compile(r'^(.*?)\s*<([^>]*)>\s*$')


CommitRecord = namedtuple('CommitRecord', [
    'sha', 'author_name', 'author_email', 'timestamp', 'insertions', 'deletions'
])


def commit_time(commit):
    """Commit (committer) time of a GitPython commit, as a local-zoned datetime"""
    return datetime.fromtimestamp(commit.committed_date).astimezone()


def parse_numstat(output):
    """
    Sum the insertions and deletions in 'git diff-tree --numstat' output.
    Binary files are reported as '-' and count as zero.
    """
    insertions = 0
    deletions = 0

    for line in output.splitlines():
        fields = line.split('\t', 2)
        if len(fields) != 3:
            continue

        added, deleted, _ = fields
        if added.isdigit():
            insertions += int(added)

        if deleted.isdigit():
            deletions += int(deleted)

    return insertions, deletions


class GitRepo(Repo):
    def __init__(self, *args, **kwargs):
        super(GitRepo, self).__init__(*args, **kwargs)
        self._identities = {}

    def head_commit(self):
        try:
            return self.head.commit
        except ValueError as e:
            raise RepositoryError("cannot resolve HEAD in %s: %s" %
                                  (self.working_dir, e))

    def iter_history(self, path_globs=(), walk_paths=False):
        """
        Lazily yield commits reachable from HEAD, newest first. If 'walk_paths'
        is set, only commits touching one of 'path_globs' are produced.
        """
        head = self.head_commit()
        paths = list(path_globs) if (walk_paths and path_globs) else ''

        try:
            for commit in self.iter_commits(head, paths=paths):
                yield commit
        except GitCommandError as e:
            raise RepositoryError("failed to walk history of %s: %s" %
                                  (self.working_dir, e))

    def canonical_identity(self, name, email):
        """
        Resolve a raw author name/email pair through the repository mailmap.
        Returns a (name, email) tuple.
        """
        key = (name, email)
        if key in self._identities:
            return self._identities[key]

        contact = "%s <%s>" % (name, email) if name else "<%s>" % email

        try:
            out = self.git.check_mailmap('--', contact)
        except GitCommandError as e:
            raise RepositoryError("failed to resolve identity '%s <%s>': %s" %
                                  (name, email, e))

        m = _contact_re.match(out.strip())
        if m is None:
            raise RepositoryError("unexpected check-mailmap output: %s" % out)

        ret = (m.group(1), m.group(2))
        if ret != key:
            logger.debug("mailmap: %s <%s> -> %s <%s>", name, email, ret[0], ret[1])

        self._identities[key] = ret
        return ret

    def diff_stat(self, commit, path_globs=()):
        """
        Count insertions and deletions between a commit and its first parent
        (or the empty tree for a root commit), restricted to 'path_globs'.
        """
        args = ['--numstat', '--no-renames', '--no-commit-id', '-r']
        if commit.parents:
            args += [commit.parents[0].hexsha, commit.hexsha]
        else:
            args += ['--root', commit.hexsha]

        args.append('--')
        args.extend(path_globs)

        try:
            out = self.git.diff_tree(*args)
        except GitCommandError as e:
            raise RepositoryError("failed to diff commit %s: %s" %
                                  (commit.hexsha[:8], e))

        return parse_numstat(out)

    def classify(self, commit, config):
        """
        Turn a commit into a CommitRecord, or return None if 'config' filters
        it out.
        """
        timestamp = commit_time(commit)
        if not config.in_window(timestamp):
            return None

        name, email = self.canonical_identity(commit.author.name,
                                              commit.author.email)

        if config.excludes_author(name):
            logger.debug("skipping %s by excluded author '%s'",
                         commit.hexsha[:8], name)
            return None

        insertions, deletions = self.diff_stat(commit, config.path_globs)
        if config.skip_empty and (insertions == 0) and (deletions == 0):
            logger.debug("skipping empty commit %s", commit.hexsha[:8])
            return None

        return CommitRecord(commit.hexsha, name, email, timestamp,
                            insertions, deletions)

    def commit_records(self, config):
        visited = 0
        kept = 0

        for commit in self.iter_history(config.path_globs, config.walk_paths):
            visited += 1
            record = self.classify(commit, config)
            if record is None:
                continue

            kept += 1
            yield record

        logger.info("visited %d commits, %d matched filters", visited, kept)
