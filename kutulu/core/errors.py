class KutuluError(Exception):
    """Base exception for every error raised by the bot."""

    pass


class InvariantViolation(KutuluError):
    """The world model is corrupted. Never caught inside the decision core."""

    pass


class CoordinateOutOfRangeError(InvariantViolation):
    """A coordinate outside the grid was used for a lookup."""

    pass


class DistanceInvariantError(InvariantViolation):
    """A computed distance fell outside the allowed range."""

    pass


class EmptyCandidateSetError(InvariantViolation):
    """The retreat selector was handed no candidate cells."""

    pass


class NoScorableCandidateError(InvariantViolation):
    """No retreat candidate could reach any frightening minion."""

    pass


class ProtocolError(KutuluError):
    """Exception raised when judge input cannot be decoded."""

    pass


class ConfigError(KutuluError):
    """Exception raised when configuration values are missing or invalid."""

    pass
