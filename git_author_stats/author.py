class AuthorStats(object):
    """
    Running totals for one canonical author name. 'email' and
    'last_commit_time' hold the values from the most recently added commit,
    in traversal order.
    """

    def __init__(self, name, email, last_commit_time=None):
        self.name = name
        self.email = email
        self.last_commit_time = last_commit_time
        self.commits = 0
        self.added = 0
        self.deleted = 0

    @property
    def changed(self):
        return self.added + self.deleted

    def add_commit(self, record):
        self.email = record.author_email
        self.last_commit_time = record.timestamp
        self.commits += 1
        self.added += record.insertions
        self.deleted += record.deletions

    def __str__(self):
        return ("AuthorStats(name=%s, email=%s, commits=%d, added=%d, deleted=%d)" %
                (self.name, self.email, self.commits, self.added, self.deleted))

    def __repr__(self):
        return self.__str__()


class AuthorTable(object):
    """Per-author totals for a single run, keyed by canonical author name"""

    def __init__(self):
        self._authors = {}

    def add(self, record):
        name = record.author_name
        if name not in self._authors:
            self._authors[name] = AuthorStats(name, record.author_email,
                                              record.timestamp)

        self._authors[name].add_commit(record)

    def extend(self, records):
        for record in records:
            self.add(record)

        return self

    def authors(self):
        return list(self._authors.values())

    def __getitem__(self, name):
        return self._authors[name]

    def __contains__(self, name):
        return name in self._authors

    def __len__(self):
        return len(self._authors)
