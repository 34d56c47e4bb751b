"""Viewfinder — device-aware view location for template-driven web apps.

Turns a view name, an optional layout name and a request into concrete
template paths, trying mobile variants first for mobile clients and
caching confirmed locations.

Basic usage::

    from viewfinder import FileSystemChecker, ViewContext, ViewEngine, ViewFound

    engine = ViewEngine(FileSystemChecker("./site"))
    context = ViewContext(
        route_values={"controller": "Home"},
        headers={"User-Agent": request_user_agent},
    )

    result = engine.find_view(context, "Index", "Site")
    if isinstance(result, ViewFound):
        ...
"""

from importlib import import_module

__version__ = "0.1.0.dev0"
__all__ = [
    "CacheStore",
    "ConfigurationError",
    "ExistenceChecker",
    "FileSystemChecker",
    "Found",
    "InvalidViewRequest",
    "LocationFormatSet",
    "MemoryCacheStore",
    "MissingRouteValue",
    "NotFound",
    "NullCacheStore",
    "PathResolver",
    "RouteValueProvider",
    "UserAgentClassifier",
    "ViewContext",
    "ViewEngine",
    "ViewEngineConfig",
    "ViewFinderError",
    "ViewFound",
    "ViewNotFound",
    "VirtualFileSystem",
    "augment",
]

# Public name -> defining module. Keeps ``import viewfinder`` cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "CacheStore": "viewfinder.cache",
    "MemoryCacheStore": "viewfinder.cache",
    "NullCacheStore": "viewfinder.cache",
    "LocationFormatSet": "viewfinder.config",
    "ViewEngineConfig": "viewfinder.config",
    "RouteValueProvider": "viewfinder.context",
    "ViewContext": "viewfinder.context",
    "ViewEngine": "viewfinder.engine",
    "ConfigurationError": "viewfinder.errors",
    "InvalidViewRequest": "viewfinder.errors",
    "MissingRouteValue": "viewfinder.errors",
    "ViewFinderError": "viewfinder.errors",
    "ExistenceChecker": "viewfinder.filesystem",
    "FileSystemChecker": "viewfinder.filesystem",
    "VirtualFileSystem": "viewfinder.filesystem",
    "UserAgentClassifier": "viewfinder.mobile",
    "augment": "viewfinder.mobile",
    "PathResolver": "viewfinder.resolver",
    "Found": "viewfinder.results",
    "NotFound": "viewfinder.results",
    "ViewFound": "viewfinder.results",
    "ViewNotFound": "viewfinder.results",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API."""
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_path), name)
