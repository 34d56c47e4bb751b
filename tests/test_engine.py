"""Tests for viewfinder.engine — view + layout lookup as one operation."""

import pytest

from viewfinder.cache import MemoryCacheStore, NullCacheStore, make_cache_key
from viewfinder.config import LocationFormatSet, ViewEngineConfig
from viewfinder.context import ViewContext
from viewfinder.engine import ViewEngine
from viewfinder.errors import ConfigurationError, InvalidViewRequest, MissingRouteValue
from viewfinder.filesystem import VirtualFileSystem
from viewfinder.results import ViewFound, ViewNotFound

LOCATIONS = LocationFormatSet(
    view_locations=("~/Views/{1}/{0}.ext", "~/Views/Shared/{0}.ext"),
    master_locations=("~/Views/{1}/{0}.master", "~/Views/Shared/{0}.master"),
    partial_view_locations=("~/Views/{1}/{0}.part", "~/Views/Shared/{0}.part"),
    mobile_view_locations=("~/Views/{1}/{0}.mobile.ext", "~/Views/Shared/{0}.mobile.ext"),
    mobile_master_locations=("~/Views/Shared/{0}.mobile.master",),
    mobile_partial_view_locations=("~/Views/Shared/{0}.mobile.part",),
)
CONFIG = ViewEngineConfig(locations=LOCATIONS, cache_identity="tests.Engine")

DESKTOP = ViewContext(route_values={"controller": "Home"})
MOBILE = ViewContext(route_values={"controller": "Home"}, is_mobile_device=True)

# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def _make_engine(*paths: str, **kwargs: object) -> tuple[ViewEngine, VirtualFileSystem]:
    vfs = VirtualFileSystem(paths)
    return ViewEngine(vfs, CONFIG, **kwargs), vfs  # type: ignore[arg-type]


class FixedGroup:
    def __init__(self, group_id: str) -> None:
        self.group_id = group_id

    def required_group_id(self, context: ViewContext) -> str:
        return self.group_id


class FixedClassifier:
    def __init__(self, mobile: bool) -> None:
        self.mobile = mobile
        self.calls = 0

    def is_mobile(self, context: ViewContext | None) -> bool:
        self.calls += 1
        return self.mobile


# ---------------------------------------------------------------------------
# find_view
# ---------------------------------------------------------------------------


class TestFindView:
    def test_view_without_layout(self) -> None:
        engine, _vfs = _make_engine("~/Views/Shared/Index.ext")

        result = engine.find_view(DESKTOP, "Index")

        assert result == ViewFound("~/Views/Shared/Index.ext", "", False)

    def test_view_with_layout(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Shared/Site.master")

        result = engine.find_view(DESKTOP, "Index", "Site")

        assert isinstance(result, ViewFound)
        assert result.view_path == "~/Views/Home/Index.ext"
        assert result.master_path == "~/Views/Shared/Site.master"

    def test_missing_view(self) -> None:
        engine, _vfs = _make_engine()

        result = engine.find_view(DESKTOP, "Index")

        assert result == ViewNotFound(("~/Views/Home/Index.ext", "~/Views/Shared/Index.ext"))

    def test_missing_layout_fails_lookup(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext")

        result = engine.find_view(DESKTOP, "Index", "Site")

        assert result == ViewNotFound(("~/Views/Home/Site.master", "~/Views/Shared/Site.master"))

    def test_both_missing_merges_diagnostics(self) -> None:
        engine, _vfs = _make_engine()

        result = engine.find_view(DESKTOP, "Index", "Site")

        assert isinstance(result, ViewNotFound)
        assert result.searched_locations == (
            "~/Views/Home/Index.ext",
            "~/Views/Shared/Index.ext",
            "~/Views/Home/Site.master",
            "~/Views/Shared/Site.master",
        )

    def test_merged_diagnostics_have_no_duplicates(self) -> None:
        locations = LocationFormatSet(
            view_locations=("~/Views/{0}",),
            master_locations=("~/Views/{0}", "~/Layouts/{0}"),
        )
        engine = ViewEngine(VirtualFileSystem(), ViewEngineConfig(locations=locations))

        result = engine.find_view(DESKTOP, "Site", "Site")

        assert result == ViewNotFound(("~/Views/Site", "~/Layouts/Site"))

    def test_specific_view_name(self) -> None:
        engine, _vfs = _make_engine("~/Custom/Page.ext")

        result = engine.find_view(DESKTOP, "~/Custom/Page.ext")

        assert result == ViewFound("~/Custom/Page.ext", "", False)

    def test_missing_specific_layout(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext")

        result = engine.find_view(DESKTOP, "Index", "/Layouts/Site.master")

        assert result == ViewNotFound(("/Layouts/Site.master",))

    def test_none_layout_name_is_no_layout(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext")
        result = engine.find_view(DESKTOP, "Index", None)  # type: ignore[arg-type]
        assert isinstance(result, ViewFound)

    def test_empty_layout_name_ignores_layout_configuration(self) -> None:
        locations = LocationFormatSet(master_locations=(), mobile_master_locations=())
        engine = ViewEngine(
            VirtualFileSystem(["~/Views/Home/Index.html"]),
            ViewEngineConfig(locations=locations),
        )

        result = engine.find_view(DESKTOP, "Index", "")

        assert result == ViewFound("~/Views/Home/Index.html", "", False)


class TestFindViewValidation:
    def test_missing_context(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(InvalidViewRequest) as exc_info:
            engine.find_view(None, "Index")
        assert exc_info.value.argument == "context"

    def test_empty_view_name(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(InvalidViewRequest, match="view_name"):
            engine.find_view(DESKTOP, "")

    def test_invalid_request_is_value_error(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(ValueError):
            engine.find_view(DESKTOP, "")

    def test_validation_happens_before_probing(self) -> None:
        engine, vfs = _make_engine()
        with pytest.raises(InvalidViewRequest):
            engine.find_view(None, "Index")
        assert vfs.probe_count == 0

    def test_missing_group_id_propagates(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(MissingRouteValue):
            engine.find_view(ViewContext(), "Index")

    def test_empty_view_locations(self) -> None:
        locations = LocationFormatSet(view_locations=(), mobile_view_locations=())
        engine = ViewEngine(VirtualFileSystem(), ViewEngineConfig(locations=locations))
        with pytest.raises(ConfigurationError):
            engine.find_view(DESKTOP, "Index")

    def test_empty_layout_locations_with_layout_name(self) -> None:
        locations = LocationFormatSet(master_locations=(), mobile_master_locations=())
        engine = ViewEngine(
            VirtualFileSystem(["~/Views/Home/Index.html"]),
            ViewEngineConfig(locations=locations),
        )
        with pytest.raises(ConfigurationError, match="layout"):
            engine.find_view(DESKTOP, "Index", "Site")


# ---------------------------------------------------------------------------
# Mobile clients
# ---------------------------------------------------------------------------


class TestMobile:
    def test_mobile_variant_preferred(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Home/Index.mobile.ext")

        result = engine.find_view(MOBILE, "Index")

        assert result == ViewFound("~/Views/Home/Index.mobile.ext", "", True)

    def test_desktop_ignores_mobile_variant(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Home/Index.mobile.ext")

        result = engine.find_view(DESKTOP, "Index")

        assert result == ViewFound("~/Views/Home/Index.ext", "", False)

    def test_mobile_falls_back_to_standard(self) -> None:
        engine, _vfs = _make_engine("~/Views/Shared/Index.ext", "~/Views/Shared/Site.master")

        result = engine.find_view(MOBILE, "Index", "Site")

        assert result == ViewFound("~/Views/Shared/Index.ext", "~/Views/Shared/Site.master", True)

    def test_mobile_search_order_in_diagnostics(self) -> None:
        engine, _vfs = _make_engine()

        result = engine.find_view(MOBILE, "Index", "Site")

        assert isinstance(result, ViewNotFound)
        assert result.searched_locations == (
            "~/Views/Home/Index.mobile.ext",
            "~/Views/Shared/Index.mobile.ext",
            "~/Views/Home/Index.ext",
            "~/Views/Shared/Index.ext",
            "~/Views/Shared/Site.mobile.master",
            "~/Views/Home/Site.master",
            "~/Views/Shared/Site.master",
        )

    def test_user_agent_classification(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Home/Index.mobile.ext")
        context = ViewContext(
            route_values={"controller": "Home"},
            headers={"User-Agent": "Mozilla/5.0 (Linux; Android 14) Mobile Safari"},
        )

        result = engine.find_view(context, "Index")

        assert isinstance(result, ViewFound)
        assert result.view_path == "~/Views/Home/Index.mobile.ext"
        assert result.mobile is True

    def test_custom_classifier_consulted_once(self) -> None:
        classifier = FixedClassifier(mobile=True)
        engine, _vfs = _make_engine("~/Views/Home/Index.mobile.ext", classifier=classifier)

        engine.find_view(DESKTOP, "Index", "")

        assert classifier.calls == 1


# ---------------------------------------------------------------------------
# Caching through the engine
# ---------------------------------------------------------------------------


class TestEngineCache:
    def test_second_lookup_served_from_cache(self) -> None:
        engine, vfs = _make_engine("~/Views/Shared/Index.ext", "~/Views/Shared/Site.master")

        first = engine.find_view(DESKTOP, "Index", "Site", use_cache=True)
        probes = vfs.probe_count
        second = engine.find_view(DESKTOP, "Index", "Site", use_cache=True)

        assert first == second
        assert vfs.probe_count == probes

    def test_view_and_layout_keys_do_not_collide(self) -> None:
        store = MemoryCacheStore()
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", cache=store)

        engine.find_view(DESKTOP, "Index", use_cache=True)
        result = engine.find_view(DESKTOP, "Index", "Index", use_cache=True)

        assert isinstance(result, ViewNotFound)
        assert store.get(make_cache_key("tests.Engine", "layout", "Index", "Home")) is None

    def test_scenario_cache_entry(self) -> None:
        store = MemoryCacheStore()
        engine, _vfs = _make_engine("~/Views/Shared/Index.ext", cache=store)

        engine.find_view(DESKTOP, "Index", use_cache=True)

        key = make_cache_key("tests.Engine", "primary", "Index", "Home")
        assert store.get(key) == "~/Views/Shared/Index.ext"

    def test_cached_desktop_path_served_to_mobile_lookup(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Home/Index.mobile.ext")

        engine.find_view(DESKTOP, "Index", use_cache=True)
        cached = engine.find_view(MOBILE, "Index", use_cache=True)
        fresh = engine.find_view(MOBILE, "Index", use_cache=False)

        assert cached == ViewFound("~/Views/Home/Index.ext", "", True)
        assert fresh == ViewFound("~/Views/Home/Index.mobile.ext", "", True)

    def test_default_identity_is_class_path(self) -> None:
        engine = ViewEngine(VirtualFileSystem())
        assert engine.resolver.cache.identity == "viewfinder.engine.ViewEngine"

    def test_null_store_always_probes(self) -> None:
        engine, vfs = _make_engine("~/Views/Home/Index.ext", cache=NullCacheStore())

        engine.find_view(DESKTOP, "Index", use_cache=True)
        engine.find_view(DESKTOP, "Index", use_cache=True)

        assert vfs.probe_count == 2

    def test_shared_store_between_engines(self) -> None:
        store = MemoryCacheStore()
        first, first_vfs = _make_engine("~/Views/Home/Index.ext", cache=store)
        second, second_vfs = _make_engine(cache=store)

        first.find_view(DESKTOP, "Index")
        result = second.find_view(DESKTOP, "Index")

        assert result == ViewFound("~/Views/Home/Index.ext", "", False)
        assert second_vfs.probe_count == 0

    def test_custom_group_provider(self) -> None:
        engine, _vfs = _make_engine("~/Views/Admin/Index.ext", group_ids=FixedGroup("Admin"))
        result = engine.find_view(ViewContext(), "Index")
        assert result == ViewFound("~/Views/Admin/Index.ext", "", False)


# ---------------------------------------------------------------------------
# Partials and async
# ---------------------------------------------------------------------------


class TestFindPartialView:
    def test_found(self) -> None:
        engine, _vfs = _make_engine("~/Views/Shared/Nav.part")
        assert engine.find_partial_view(DESKTOP, "Nav") == ViewFound("~/Views/Shared/Nav.part")

    def test_mobile_partial(self) -> None:
        engine, _vfs = _make_engine("~/Views/Shared/Nav.part", "~/Views/Shared/Nav.mobile.part")
        result = engine.find_partial_view(MOBILE, "Nav")
        assert result == ViewFound("~/Views/Shared/Nav.mobile.part", "", True)

    def test_not_found(self) -> None:
        engine, _vfs = _make_engine()
        result = engine.find_partial_view(DESKTOP, "Nav")
        assert result == ViewNotFound(("~/Views/Home/Nav.part", "~/Views/Shared/Nav.part"))

    def test_partial_scope_separate_from_views(self) -> None:
        store = MemoryCacheStore()
        engine, _vfs = _make_engine("~/Views/Home/Nav.ext", "~/Views/Home/Nav.part", cache=store)

        engine.find_view(DESKTOP, "Nav")
        result = engine.find_partial_view(DESKTOP, "Nav")

        assert result == ViewFound("~/Views/Home/Nav.part")
        assert len(store) == 2

    def test_empty_name(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(InvalidViewRequest, match="partial_name"):
            engine.find_partial_view(DESKTOP, "")


class TestFindViewAsync:
    @pytest.mark.asyncio
    async def test_found(self) -> None:
        engine, _vfs = _make_engine("~/Views/Home/Index.ext", "~/Views/Shared/Site.master")

        result = await engine.find_view_async(DESKTOP, "Index", "Site")

        assert result == ViewFound("~/Views/Home/Index.ext", "~/Views/Shared/Site.master", False)

    @pytest.mark.asyncio
    async def test_errors_propagate(self) -> None:
        engine, _vfs = _make_engine()
        with pytest.raises(InvalidViewRequest):
            await engine.find_view_async(None, "Index")
