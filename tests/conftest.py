import os

import pytest
from git import Actor, Repo

from git_author_stats.utils import open_git_repo

BASE_TIME = 1700000000  # 2023-11-14 22:13:20 UTC


class RepoBuilder(object):
    """Creates commits with fixed authors and timestamps in a scratch repo"""

    def __init__(self, path):
        self.path = str(path)
        self.repo = Repo.init(self.path)

    def write(self, relpath, lines):
        fullpath = os.path.join(self.path, relpath)
        dirname = os.path.dirname(fullpath)
        if not os.path.isdir(dirname):
            os.makedirs(dirname)

        with open(fullpath, 'w') as fh:
            fh.write(''.join("%s\n" % l for l in lines))

        return relpath

    def mailmap(self, lines):
        with open(os.path.join(self.path, '.mailmap'), 'w') as fh:
            fh.write('\n'.join(lines) + '\n')

    def commit(self, files, name, email, when, message="change"):
        """
        'files' maps relative paths to lists of lines; 'when' is seconds
        since the UNIX epoch. Returns the new commit.
        """
        for relpath, lines in files.items():
            self.write(relpath, lines)

        self.repo.index.add(list(files.keys()))
        actor = Actor(name, email)
        date = "%d +0000" % when
        return self.repo.index.commit(message, author=actor, committer=actor,
                                      author_date=date, commit_date=date)

    def open(self):
        return open_git_repo(self.path)


@pytest.fixture
def builder(tmp_path):
    return RepoBuilder(tmp_path / "repo")


@pytest.fixture
def alice_bob_repo(builder):
    """
    Alice: +10/-0 then +5/-2, Bob: +1/-1, all in a.txt.
    """
    lines = ["line %d" % i for i in range(10)]
    builder.commit({'a.txt': lines}, 'Alice', 'a@x.com', BASE_TIME)

    lines = lines[2:] + ["extra %d" % i for i in range(5)]
    builder.commit({'a.txt': lines}, 'Alice', 'a@x.com', BASE_TIME + 60)

    lines = ["changed"] + lines[1:]
    builder.commit({'a.txt': lines}, 'Bob', 'b@x.com', BASE_TIME + 120)

    return builder


def remove_object(repo, sha):
    """Delete a loose object so that reading it fails"""
    os.remove(os.path.join(repo.git_dir, 'objects', sha[:2], sha[2:]))
