"""Exceptions raised by the ECO memorizer services.

Cache errors describe a failed refresh of the move index (the upstream
table could not be fetched or parsed). Resolve errors describe a failed
query and are what the HTTP layer translates into status codes.
"""


class EcoMemorizerError(Exception):
    """Base class for all ECO memorizer errors."""


class CacheError(EcoMemorizerError):
    """The move index could not be refreshed from the upstream table."""


class FetchFailedError(CacheError):
    """The upstream document could not be retrieved."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseFailedError(CacheError):
    """The upstream document is not the expected ECO table."""


class ResolveError(EcoMemorizerError):
    """A lookup against the move index failed."""


class CodeNotFoundError(ResolveError):
    """The requested ECO code is absent from the current index."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Move Code '{code}' Not Found. Please Enter a valid code")


class PrefixMismatchError(ResolveError):
    """The supplied moves are not a literal prefix of the canonical line."""

    def __init__(self, code: str, move_prefix: str):
        self.code = code
        self.move_prefix = move_prefix
        super().__init__(f"Invalid moves provided '{move_prefix}' for code {code}")


class UpstreamUnavailableError(ResolveError):
    """The move index is unavailable because its refresh failed."""

    def __init__(self, cause: CacheError):
        self.cause = cause
        super().__init__(f"ECO table unavailable: {cause}")
