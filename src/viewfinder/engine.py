"""The view engine: find a view and its layout in one call.

``ViewEngine.find_view`` resolves the primary template and the optional
layout independently, each with its own location formats (mobile ones
first for mobile clients) and its own cache scope, then folds both
outcomes into a single ``ViewFound`` or ``ViewNotFound``.

One engine serves the whole application.  Its own state is read-only
configuration; the cache store and existence checker carry the only
mutable state and must tolerate concurrent access.

Usage::

    engine = ViewEngine(FileSystemChecker("./site"))
    context = ViewContext(route_values={"controller": "Home"})

    result = engine.find_view(context, "Index", "Site")
    if isinstance(result, ViewFound):
        render(result.view_path, result.master_path)
    else:
        report_missing(result.searched_locations)
"""

import functools
import logging

import anyio

from viewfinder.cache import CacheStore, MemoryCacheStore, ResolutionCache
from viewfinder.config import ViewEngineConfig
from viewfinder.context import GroupIdProvider, RouteValueProvider, ViewContext
from viewfinder.errors import InvalidViewRequest
from viewfinder.filesystem import ExistenceChecker
from viewfinder.mobile import MobilityClassifier, UserAgentClassifier, augment
from viewfinder.resolver import PathResolver
from viewfinder.results import (
    SCOPE_LAYOUT,
    SCOPE_PARTIAL,
    SCOPE_PRIMARY,
    Found,
    ViewFound,
    ViewNotFound,
    ViewResult,
)

logger = logging.getLogger("viewfinder.engine")


class ViewEngine:
    """Locates view, layout and partial templates for a request.

    Args:
        checker: Answers whether a virtual path exists.
        config: Location formats and defaults for the collaborators below.
        cache: Store for confirmed locations. Defaults to a fresh
            ``MemoryCacheStore`` that lives as long as the engine.
        classifier: Decides whether mobile locations go first.
            Defaults to ``UserAgentClassifier(config.mobile_keywords)``.
        group_ids: Supplies the ``{1}`` value. Defaults to
            ``RouteValueProvider(config.group_route_key)``.
    """

    __slots__ = ("_classifier", "_config", "_group_ids", "_resolver")

    def __init__(
        self,
        checker: ExistenceChecker,
        config: ViewEngineConfig | None = None,
        *,
        cache: CacheStore | None = None,
        classifier: MobilityClassifier | None = None,
        group_ids: GroupIdProvider | None = None,
    ) -> None:
        self._config = config or ViewEngineConfig()
        self._classifier = classifier or UserAgentClassifier(self._config.mobile_keywords)
        self._group_ids = group_ids or RouteValueProvider(self._config.group_route_key)
        identity = self._config.cache_identity or (
            f"{type(self).__module__}.{type(self).__qualname__}"
        )
        store = cache if cache is not None else MemoryCacheStore()
        self._resolver = PathResolver(checker, ResolutionCache(store, identity))

    @property
    def config(self) -> ViewEngineConfig:
        return self._config

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def find_view(
        self,
        context: ViewContext | None,
        view_name: str,
        master_name: str = "",
        use_cache: bool = True,
    ) -> ViewResult:
        """Find *view_name* and, if given, the layout *master_name*.

        Both names are resolved even when the first one misses, so the
        returned ``ViewNotFound`` lists every location that was tried.

        Raises:
            InvalidViewRequest: If *context* is missing or *view_name* is empty.
            ConfigurationError: If a needed location list is empty.
            MissingRouteValue: If the group id cannot be determined.
        """
        self._check_request(context, view_name, "view_name")

        locations = self._config.locations
        mobile = self._classifier.is_mobile(context)
        view_locations = augment(locations.view_locations, locations.mobile_view_locations, mobile)
        master_locations = augment(
            locations.master_locations, locations.mobile_master_locations, mobile
        )

        group_id = self._group_ids.required_group_id(context)
        view = self._resolver.resolve(
            context, view_name, group_id, view_locations, SCOPE_PRIMARY, use_cache
        )
        master = self._resolver.resolve(
            context, master_name or "", group_id, master_locations, SCOPE_LAYOUT, use_cache
        )

        # An unnamed layout resolves to Found("") and never fails the lookup
        if (
            isinstance(view, Found)
            and view.path
            and isinstance(master, Found)
            and (master.path or not master_name)
        ):
            logger.debug("View %r found at %s (layout: %s)", view_name, view.path, master.path)
            return ViewFound(view.path, master.path, mobile)

        searched = tuple(dict.fromkeys((*view.searched, *master.searched)))
        logger.debug("View %r not found; searched %d locations", view_name, len(searched))
        return ViewNotFound(searched)

    def find_partial_view(
        self,
        context: ViewContext | None,
        partial_name: str,
        use_cache: bool = True,
    ) -> ViewResult:
        """Find a partial template. Partials never have a layout."""
        self._check_request(context, partial_name, "partial_name")

        locations = self._config.locations
        mobile = self._classifier.is_mobile(context)
        partial_locations = augment(
            locations.partial_view_locations, locations.mobile_partial_view_locations, mobile
        )

        group_id = self._group_ids.required_group_id(context)
        partial = self._resolver.resolve(
            context, partial_name, group_id, partial_locations, SCOPE_PARTIAL, use_cache
        )
        if isinstance(partial, Found) and partial.path:
            return ViewFound(partial.path, "", mobile)
        return ViewNotFound(tuple(dict.fromkeys(partial.searched)))

    async def find_view_async(
        self,
        context: ViewContext | None,
        view_name: str,
        master_name: str = "",
        use_cache: bool = True,
    ) -> ViewResult:
        """Run ``find_view`` in a worker thread so slow probes don't block the loop."""
        call = functools.partial(self.find_view, context, view_name, master_name, use_cache)
        return await anyio.to_thread.run_sync(call)

    @staticmethod
    def _check_request(context: ViewContext | None, name: str, argument: str) -> None:
        if context is None:
            raise InvalidViewRequest("context")
        if not name:
            raise InvalidViewRequest(argument, f"{argument} must not be empty")
