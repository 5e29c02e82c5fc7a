"""Exceptions raised while scraping and parsing Mediapart bills."""


class MediapartError(Exception):
    """Base class for all scraper errors."""


class UnparseableLine(MediapartError, ValueError):
    """A bill line's text matches none of the known field shapes."""


class UnresolvableLink(MediapartError, ValueError):
    """A bill line's link yields no identifiable bill id."""


class UnrecognizedLayout(MediapartError, ValueError):
    """The document contains none of the known bill containers."""


class AuthenticationError(MediapartError):
    """The login form was submitted but the site did not accept the credentials."""
