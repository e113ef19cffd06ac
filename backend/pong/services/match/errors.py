class MatchError(Exception):
    """Base class for per-intent failures. Never fatal to the process."""


class CapacityExceeded(MatchError):
    """Both competitive slots are already bound."""


class InvalidIntent(MatchError):
    """The intent is malformed or not allowed in the current phase."""


class UnknownSession(MatchError):
    """The intent references a session that is not connected."""
