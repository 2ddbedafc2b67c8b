from __future__ import annotations


class ComfortDashError(Exception):
    """Base error. public_message is the only text a caller ever sees."""
    public_message = "Internal error"


class ConfigurationError(ComfortDashError):
    public_message = "Missing API Key"


class UpstreamFailure(ComfortDashError):
    # Network errors, bad status, non-JSON or malformed documents, and anything
    # raised while scoring. Callers get the same body for all of them.
    public_message = "Failed to fetch weather data"
