"""Mobile device support.

Two pieces:

- ``augment`` puts mobile location formats ahead of the standard ones
  when the request qualifies, keeping the relative order of both lists.
- ``UserAgentClassifier`` decides whether a request qualifies.

The engine keeps both decisions separate so hosts can swap the
classifier (device database, feature cookie, ``?mobile=1`` override)
without touching the search order.
"""

from collections.abc import Sequence
from typing import Protocol

from viewfinder.config import DEFAULT_MOBILE_KEYWORDS
from viewfinder.context import ViewContext


class MobilityClassifier(Protocol):
    """Decides whether a request should see mobile templates first."""

    def is_mobile(self, context: ViewContext | None) -> bool: ...


def augment(
    base: Sequence[str] | None,
    mobile: Sequence[str] | None,
    is_mobile_request: bool,
) -> tuple[str, ...]:
    """Return the effective search order for one kind of template.

    ``base=[A, B]``, ``mobile=[X, Y]`` gives ``(X, Y, A, B)`` for a
    mobile request and ``(A, B)`` otherwise.  Neither input is mutated.
    If either list is empty or ``None``, *base* is returned unchanged.
    """
    base_formats = tuple(base or ())
    if not is_mobile_request or not base_formats or not mobile:
        return base_formats
    return (*mobile, *base_formats)


class UserAgentClassifier:
    """Classify requests by substrings of the ``User-Agent`` header.

    An explicit ``ViewContext.is_mobile_device`` always wins over the
    header.  A missing context or header is treated as a desktop client.
    """

    __slots__ = ("_keywords",)

    def __init__(self, keywords: Sequence[str] = DEFAULT_MOBILE_KEYWORDS) -> None:
        self._keywords = tuple(k.lower() for k in keywords if k)

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords

    def is_mobile(self, context: ViewContext | None) -> bool:
        if context is None:
            return False
        if context.is_mobile_device is not None:
            return context.is_mobile_device
        user_agent = context.user_agent.lower()
        if not user_agent:
            return False
        return any(keyword in user_agent for keyword in self._keywords)
