"""
pulse/errors.py

Error taxonomy for a pulse lookup.

Required sources (geocoding, configuration) propagate to the caller; degradable
sources (weather, air quality, summary) are converted to None or a fallback
string by the aggregator and the summarizer.
"""


class PulseError(Exception):
    """Base error with a user-facing message and the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PulseError):
    status_code = 400


class NotFoundError(PulseError):
    status_code = 500


class UpstreamError(PulseError):
    status_code = 500


class AllSourcesFailedError(PulseError):
    status_code = 500


class ConfigurationError(PulseError):
    status_code = 500


class SummarizationError(PulseError):
    """Raised by the LLM client; never escapes summarize()."""
