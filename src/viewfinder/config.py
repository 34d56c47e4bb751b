"""Engine configuration.

LocationFormatSet and ViewEngineConfig are frozen dataclasses: immutable
after creation, safe to share between threads, no string-key dict
lookups.  Every location format is validated when the set is built.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, fields

from viewfinder.locations import check_location_format

# Substrings (lower-case) that mark a User-Agent as a mobile device
DEFAULT_MOBILE_KEYWORDS: tuple[str, ...] = (
    "mobile",
    "android",
    "iphone",
    "ipad",
    "ipod",
    "blackberry",
    "windows phone",
    "webos",
    "opera mini",
    "palm",
    "symbian",
)


@dataclass(frozen=True, slots=True)
class LocationFormatSet:
    """Ordered location formats for each kind of template.

    Order encodes search priority: the first format that produces an
    existing file wins.  The ``mobile_*`` formats are searched ahead of
    their standard counterparts when the request comes from a mobile
    device.

    Lists are accepted and stored as tuples::

        locations = LocationFormatSet(
            view_locations=["~/Views/{1}/{0}.html", "~/Views/Shared/{0}.html"],
            mobile_view_locations=["~/Views/{1}/{0}.mobile.html"],
        )
    """

    view_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.html",
        "~/Views/Shared/{0}.html",
    )
    master_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.master.html",
        "~/Views/Shared/{0}.master.html",
    )
    partial_view_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.html",
        "~/Views/Shared/{0}.html",
    )
    mobile_view_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.mobile.html",
        "~/Views/Shared/{0}.mobile.html",
    )
    mobile_master_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.master.mobile.html",
        "~/Views/Shared/{0}.master.mobile.html",
    )
    mobile_partial_view_locations: tuple[str, ...] = (
        "~/Views/{1}/{0}.mobile.html",
        "~/Views/Shared/{0}.mobile.html",
    )

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                # A bare string would otherwise be iterated character by character
                value = (value,)
            formats = tuple(value)
            for fmt in formats:
                check_location_format(fmt)
            object.__setattr__(self, f.name, formats)

    @classmethod
    def webforms(cls) -> LocationFormatSet:
        """The classic ``.aspx``/``.ascx``/``.master`` layout."""
        return cls(
            view_locations=(
                "~/Views/{1}/{0}.aspx",
                "~/Views/{1}/{0}.ascx",
                "~/Views/Shared/{0}.aspx",
                "~/Views/Shared/{0}.ascx",
            ),
            master_locations=(
                "~/Views/{1}/{0}.master",
                "~/Views/Shared/{0}.master",
            ),
            partial_view_locations=(
                "~/Views/{1}/{0}.aspx",
                "~/Views/{1}/{0}.ascx",
                "~/Views/Shared/{0}.aspx",
                "~/Views/Shared/{0}.ascx",
            ),
            mobile_view_locations=(
                "~/Views/{1}/{0}.mobile.aspx",
                "~/Views/{1}/{0}.mobile.ascx",
                "~/Views/Shared/{0}.mobile.aspx",
                "~/Views/Shared/{0}.mobile.ascx",
            ),
            mobile_master_locations=(
                "~/Views/{1}/{0}.mobile.master",
                "~/Views/Shared/{0}.mobile.master",
            ),
            mobile_partial_view_locations=(),
        )

    @classmethod
    def preset(cls, name: str) -> LocationFormatSet:
        """Look up a named preset (``"html"`` or ``"webforms"``)."""
        if name == "html":
            return cls()
        if name == "webforms":
            return cls.webforms()
        msg = f"Unknown location preset {name!r}; expected 'html' or 'webforms'"
        raise ValueError(msg)


def _keywords(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(v.lower() for v in values)


@dataclass(frozen=True, slots=True)
class ViewEngineConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ViewEngineConfig(
            locations=LocationFormatSet.webforms(),
            group_route_key="area",
        )
    """

    locations: LocationFormatSet = field(default_factory=LocationFormatSet)

    # Route value substituted into {1} of every location format
    group_route_key: str = "controller"

    # User-Agent substrings that classify a request as mobile
    mobile_keywords: tuple[str, ...] = DEFAULT_MOBILE_KEYWORDS

    # Resolver identity embedded in cache keys (defaults to the engine's class path)
    cache_identity: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mobile_keywords", _keywords(self.mobile_keywords))
