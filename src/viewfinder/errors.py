"""Viewfinder exception hierarchy.

Shared across the resolver, engine, and collaborators so every module
raises and catches the same types.  A missing view is *not* an error:
it is reported as a ``ViewNotFound`` value carrying the searched
locations.
"""


class ViewFinderError(Exception):
    """Base for all viewfinder-specific errors."""


class ConfigurationError(ViewFinderError):
    """Raised when the location configuration is unusable.

    Malformed format strings are caught when a ``LocationFormatSet`` is
    built.  An empty location list is only detected at resolution time,
    when a general name actually needs it.
    """


class InvalidViewRequest(ViewFinderError, ValueError):
    """Raised when a lookup is called with a missing context or name."""

    def __init__(self, argument: str, detail: str = "") -> None:
        self.argument = argument
        super().__init__(detail or f"{argument} is required")


class MissingRouteValue(ViewFinderError, KeyError):  # noqa: N818
    """Raised when the group id cannot be read from the route values."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"The route data does not contain a value for {self.key!r}"
