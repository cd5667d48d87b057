class PredictorError(Exception):
    """Base class for domain errors raised outside the scoring engine."""


class NotFoundError(PredictorError):
    """Unknown team, missing stats row, or no season data at all."""


class InsufficientDataError(NotFoundError):
    """Rows exist but none carry usable values for league averages."""


class InvalidArgumentError(PredictorError):
    """Request is well-formed but semantically invalid, e.g. a team playing itself."""


class PaywallError(PredictorError):
    """Guest device has used all of its free predictions."""


class ConflictError(PredictorError):
    """A concurrent write won the race for the same row."""


class ServiceNotConfiguredError(PredictorError):
    """A required upstream credential is missing."""


class UpstreamError(PredictorError):
    """The upstream API answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: int = 502, reason: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
