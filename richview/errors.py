"""
Error types for RichView.
Engine failures are contained by the viewer and never reach the host page.
"""


class RichViewError(Exception):
    """Base class for RichView errors."""


class SanitizerUnavailableError(RichViewError):
    """The sanitization engine could not be loaded."""


class SanitizationError(RichViewError):
    """The sanitization engine failed on a given input."""


class GuardClosedError(RichViewError):
    """A generation token was requested after the guard was closed."""


class UnknownProfileError(RichViewError, ValueError):
    """No sanitization profile is registered under the requested name."""
