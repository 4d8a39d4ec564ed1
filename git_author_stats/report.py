from git_author_stats.filters import (SORT_NAME, SORT_EMAIL, SORT_COMMITS,
                                      SORT_ADDED, SORT_DELETED, ORDER_DESC)

_sort_keys = {
    SORT_NAME: lambda a: a.name,
    SORT_EMAIL: lambda a: a.email,
    SORT_COMMITS: lambda a: a.commits,
    SORT_ADDED: lambda a: a.added,
    SORT_DELETED: lambda a: a.deleted,
}

summary_fmt = "Since %04d/%02d: %d commits, %d lines added, %d lines deleted"


def sort_authors(authors, field=SORT_COMMITS, order=ORDER_DESC):
    """Sort per-author totals by 'field'. Ties keep their original order."""
    return sorted(authors, key=_sort_keys[field], reverse=(order == ORDER_DESC))


def visible_authors(authors, skip_empty=True):
    if not skip_empty:
        return list(authors)

    return [a for a in authors if a.changed > 0]


def summary(author):
    t = author.last_commit_time
    return summary_fmt % (t.year, t.month, author.commits, author.added,
                          author.deleted)


def format_author(author, module=None):
    fields = [author.name, author.email, str(author.commits),
              str(author.added), str(author.deleted)]

    if module is not None:
        fields.insert(0, module)

    return '\t'.join(fields) + '\t ' + summary(author)


def render_report(authors, config):
    """
    Sort and format per-author totals according to 'config'. Returns a list
    of output lines, one per author.
    """
    ordered = sort_authors(authors, config.sort_field, config.sort_order)
    return [format_author(a, config.module)
            for a in visible_authors(ordered, config.skip_empty)]
