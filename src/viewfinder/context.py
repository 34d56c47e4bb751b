"""Request context handed to the engine and its collaborators.

The engine never inspects the context itself.  It passes it through to
the mobility classifier, the group id provider and the existence
checker, so hosts can carry whatever they need in ``route_values`` and
``headers``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from viewfinder.errors import MissingRouteValue


@dataclass(frozen=True, slots=True)
class ViewContext:
    """One lookup's view of the current request.

    Attributes:
        route_values: Values captured by routing (``controller``, ``action``, ...).
        headers: Request headers. Looked up case-insensitively via ``header()``.
        is_mobile_device: Explicit device capability, e.g. from a
            browser-capabilities database. ``None`` means unknown, in
            which case classifiers fall back to the User-Agent.
    """

    route_values: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    is_mobile_device: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "route_values", MappingProxyType(dict(self.route_values)))
        lowered = {k.lower(): v for k, v in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(lowered))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the header value for *name*, ignoring case."""
        return self.headers.get(name.lower(), default)

    @property
    def user_agent(self) -> str:
        return self.header("user-agent") or ""


class GroupIdProvider(Protocol):
    """Supplies the group id substituted into ``{1}`` of location formats."""

    def required_group_id(self, context: ViewContext) -> str: ...


class RouteValueProvider:
    """Read the group id from a route value (``controller`` by default)."""

    __slots__ = ("_key",)

    def __init__(self, key: str = "controller") -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def required_group_id(self, context: ViewContext) -> str:
        """Return the route value, raising if it is absent or empty.

        Raises:
            MissingRouteValue: If the route data has no usable value.
        """
        value = context.route_values.get(self._key)
        if not value:
            raise MissingRouteValue(self._key)
        return str(value)
