"""Lookup result values.

Immutable frozen dataclasses. A miss is an ordinary value, never an
exception: it carries every location that was tried so the host can
show a useful "view not found" page.
"""

from dataclasses import dataclass
from typing import TypeAlias

# Cache scope tags, one per kind of template
SCOPE_PRIMARY = "primary"
SCOPE_LAYOUT = "layout"
SCOPE_PARTIAL = "partial"


@dataclass(frozen=True, slots=True)
class Found:
    """A single name resolved to an existing path.

    ``path`` is empty when no name was requested (e.g. no layout).
    """

    path: str

    @property
    def searched(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class NotFound:
    """No candidate existed. ``searched`` lists candidates in probe order."""

    searched: tuple[str, ...]


Outcome: TypeAlias = Found | NotFound


@dataclass(frozen=True, slots=True)
class ViewFound:
    """The view (and its layout, if one was named) exist.

    Attributes:
        view_path: Confirmed path of the primary template.
        master_path: Confirmed path of the layout, or ``""`` when none was named.
        mobile: Whether mobile locations were searched first. This describes
            the search order, not the variant of the returned paths: a
            location cached by a desktop lookup is returned as-is to a
            mobile one.
    """

    view_path: str
    master_path: str = ""
    mobile: bool = False


@dataclass(frozen=True, slots=True)
class ViewNotFound:
    """The view or its layout is missing.

    ``searched_locations`` merges the primary and layout candidates,
    in probe order, without duplicates.
    """

    searched_locations: tuple[str, ...]


ViewResult: TypeAlias = ViewFound | ViewNotFound
