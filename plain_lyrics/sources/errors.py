class LookupFailure(RuntimeError):
    pass


class NetworkError(LookupFailure):
    """Connection failure, timeout or a non-200 answer."""


class FormatError(LookupFailure):
    """Structured response did not have the expected shape."""


class ParseError(LookupFailure):
    """Lyrics container was not found on the fetched page."""
