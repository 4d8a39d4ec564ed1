class AuthorStatsError(Exception):
    pass


class ConfigError(AuthorStatsError):
    """Raised for invalid command-line options, before the repository is opened"""
    pass


class RepositoryError(AuthorStatsError):
    """Raised when the repository cannot be opened, walked or diffed"""
    pass
