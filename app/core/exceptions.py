# app/core/exceptions.py
"""
Application errors that are mapped to HTTP responses in app.main.

Routers still raise fastapi.HTTPException for plain 400/401/404 cases; these
classes are for failures raised below the router layer.
"""


class StudioError(Exception):
    """Base class for all application errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class AIKeyNotConfiguredError(StudioError):
    def __init__(self):
        super().__init__("OpenRouter API key not configured")


class UpstreamServiceError(StudioError):
    """The external completion API failed or returned nothing usable."""

    status_code = 502
