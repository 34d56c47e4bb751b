"""Path resolution for a single template name.

Given a name, a group id and an ordered list of location formats, find
the first candidate that exists:

1. Empty name: nothing was requested, ``Found("")``.
2. Cache hit (when ``use_cache``): return the cached path unprobed.
3. Specific name (``~/...`` or ``/...``): probe the name itself.
4. General name: expand every format in order, first existing wins.

Hits are written to the cache; misses never are.  The resolver holds no
per-call state, so one instance serves any number of concurrent
lookups.
"""

import logging
from collections.abc import Sequence

from viewfinder.cache import ResolutionCache
from viewfinder.context import ViewContext
from viewfinder.errors import ConfigurationError
from viewfinder.filesystem import ExistenceChecker
from viewfinder.locations import check_location_format, format_location, is_specific_path
from viewfinder.results import Found, NotFound, Outcome

logger = logging.getLogger("viewfinder.resolver")


class PathResolver:
    """Resolve names against location formats, with a shared cache."""

    __slots__ = ("_cache", "_checker")

    def __init__(self, checker: ExistenceChecker, cache: ResolutionCache) -> None:
        self._checker = checker
        self._cache = cache

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    def resolve(
        self,
        context: ViewContext | None,
        name: str,
        group_id: str,
        locations: Sequence[str],
        scope: str,
        use_cache: bool,
    ) -> Outcome:
        """Resolve *name* to an existing path.

        Args:
            context: Passed through to the existence checker.
            name: Logical name (``"Index"``) or specific path (``"~/x.html"``).
            group_id: Substituted into ``{1}``; ignored for specific names.
            locations: Location formats in priority order.
            scope: Cache scope tag, keeps kinds (view/layout/partial) apart.
            use_cache: Consult the cache before probing.

        Returns:
            ``Found`` with the confirmed path, or ``NotFound`` listing
            every candidate that was probed.

        Raises:
            ConfigurationError: If a general name must be searched but
                *locations* is empty, or a format reaching the search is
                malformed.
        """
        if not name:
            return Found("")

        specific = is_specific_path(name)
        if not specific and not locations:
            msg = f"No {scope} locations are configured; cannot search for {name!r}"
            raise ConfigurationError(msg)

        key = self._cache.key_for(scope, name, "" if specific else group_id)
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s %r: %s", scope, name, cached)
                return Found(cached)

        if specific:
            return self._resolve_specific(context, name, key)
        return self._resolve_general(context, name, group_id, locations, key, scope)

    def _resolve_specific(self, context: ViewContext | None, name: str, key: str) -> Outcome:
        if not self._checker.exists(name, context):
            logger.debug("Specific path %r does not exist", name)
            return NotFound((name,))
        self._cache.put(key, name)
        return Found(name)

    def _resolve_general(
        self,
        context: ViewContext | None,
        name: str,
        group_id: str,
        locations: Sequence[str],
        key: str,
        scope: str,
    ) -> Outcome:
        searched: list[str] = []
        for fmt in locations:
            check_location_format(fmt)
            candidate = format_location(fmt, name, group_id)
            if self._checker.exists(candidate, context):
                logger.debug("Resolved %s %r to %s", scope, name, candidate)
                self._cache.put(key, candidate)
                return Found(candidate)
            searched.append(candidate)

        logger.debug("No %s found for %r after %d candidates", scope, name, len(searched))
        return NotFound(tuple(searched))
