"""Unit tests for LocationVM acquisition and marker synchronization."""

from datetime import datetime, timezone

import pytest

from app.viewmodels.location_vm import (
    INITIAL_CENTER,
    INITIAL_ZOOM,
    LOCATED_ZOOM,
    NOT_SUPPORTED_MESSAGE,
    PAN_DURATION_S,
    UNAVAILABLE_MESSAGE,
    LocationVM,
)
from core.models import Location
from core.services.interfaces import PositionOptions
from core.services.theme_service import DARK_TILES, LIGHT_TILES


@pytest.fixture
def vm(provider, renderer, clock):
    return LocationVM(provider, renderer, clock=clock)


class TestMount:
    """Test cases for map creation and the first acquisition."""

    def test_mount_creates_world_view(self, vm, renderer, provider):
        vm.mount()

        assert renderer.exists is True
        assert renderer.created == 1
        assert renderer.center == INITIAL_CENTER
        assert renderer.zoom == INITIAL_ZOOM
        assert renderer.tile_source == LIGHT_TILES
        assert len(provider.requests) == 1
        assert vm.loading is True
        assert vm.can_refresh is False

    def test_mount_dark_uses_dark_tiles(self, provider, renderer):
        vm = LocationVM(provider, renderer, is_dark=True)

        vm.mount()

        assert renderer.tile_source == DARK_TILES

    def test_mount_twice_creates_one_map(self, vm, renderer):
        vm.mount()
        vm.mount()

        assert renderer.created == 1

    def test_request_uses_configured_options(self, provider, renderer):
        options = PositionOptions(enable_high_accuracy=False, timeout_ms=1000)
        vm = LocationVM(provider, renderer, options=options)

        vm.mount()

        assert provider.requests[0][0] is options

    def test_default_options(self, vm, provider):
        vm.mount()

        options = provider.requests[0][0]
        assert options.enable_high_accuracy is True
        assert options.timeout_ms == 5000
        assert options.maximum_age_ms == 0

    def test_refresh_before_mount_is_ignored(self, vm, provider):
        assert vm.refresh() is False
        assert provider.requests == []


class TestAcquisition:
    """Test cases for success, failure and refresh handling."""

    def test_success_places_marker_and_centers(self, vm, renderer, provider, clock):
        vm.mount()
        provider.succeed(51.5, -0.12)

        assert vm.location == Location(51.5, -0.12)
        assert vm.loading is False
        assert vm.error is None
        assert vm.last_updated is not None
        assert renderer.marker == (51.5, -0.12)
        assert renderer.markers_added == 1
        assert renderer.view_calls[-1] == ((51.5, -0.12), LOCATED_ZOOM, True, PAN_DURATION_S)
        assert PAN_DURATION_S == 1.0
        assert LOCATED_ZOOM == 15

    def test_second_success_moves_marker(self, vm, renderer, provider):
        vm.mount()
        provider.succeed(1.0, 2.0)
        vm.refresh()
        provider.succeed(3.0, 4.0)

        assert renderer.markers_added == 1
        assert renderer.marker == (3.0, 4.0)
        assert vm.location == Location(3.0, 4.0)

    def test_failure_keeps_prior_location(self, vm, renderer, provider):
        """Test a failed read keeps the previous reading and marker."""
        vm.mount()
        provider.succeed(10.0, 20.0)
        vm.refresh()
        provider.fail("timeout")

        assert vm.error == UNAVAILABLE_MESSAGE
        assert vm.loading is False
        assert vm.location == Location(10.0, 20.0)
        assert renderer.marker == (10.0, 20.0)

    def test_next_success_clears_error(self, vm, provider):
        vm.mount()
        provider.fail("denied")
        vm.refresh()
        provider.succeed(5.0, 6.0)

        assert vm.error is None
        assert vm.location == Location(5.0, 6.0)

    def test_failure_without_prior_location(self, vm, renderer, provider):
        vm.mount()
        provider.fail("denied")

        assert vm.location is None
        assert vm.error == UNAVAILABLE_MESSAGE
        assert renderer.marker is None

    def test_provider_unavailable(self, provider, renderer):
        provider.available = False
        vm = LocationVM(provider, renderer)

        vm.mount()

        assert vm.error == NOT_SUPPORTED_MESSAGE
        assert vm.loading is False
        assert provider.requests == []
        assert renderer.exists is True

    def test_refresh_ignored_while_loading(self, vm, provider):
        vm.mount()

        assert vm.refresh() is False
        assert len(provider.requests) == 1

    def test_refresh_clears_error(self, vm, provider):
        vm.mount()
        provider.fail()

        assert vm.refresh() is True
        assert vm.error is None
        assert vm.loading is True

    def test_last_updated_uses_clock(self, provider, renderer):
        stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        vm = LocationVM(provider, renderer, clock=lambda: stamp)
        vm.mount()
        provider.succeed(0.5, 0.5)

        assert vm.last_updated == stamp

    def test_on_changed_notified(self, provider, renderer):
        calls = []
        vm = LocationVM(provider, renderer, on_changed=lambda: calls.append(vm.loading))

        vm.mount()
        provider.succeed(1.0, 1.0)

        assert calls == [True, False]


class TestThemeAndLifecycle:
    """Test cases for tile swapping and mount/unmount."""

    def test_theme_swap_keeps_marker_and_view(self, vm, renderer, provider):
        vm.mount()
        provider.succeed(48.85, 2.35)
        views_before = len(renderer.view_calls)

        vm.set_dark(True)

        assert renderer.tile_source == DARK_TILES
        assert renderer.tile_source.attribution != LIGHT_TILES.attribution
        assert renderer.marker == (48.85, 2.35)
        assert renderer.center == (48.85, 2.35)
        assert renderer.zoom == LOCATED_ZOOM
        assert len(renderer.view_calls) == views_before
        assert renderer.created == 1

        vm.set_dark(False)

        assert renderer.tile_source == LIGHT_TILES

    def test_theme_before_mount_applies_on_mount(self, vm, renderer):
        vm.set_dark(True)

        assert renderer.tile_source is None

        vm.mount()

        assert renderer.tile_source == DARK_TILES

    def test_unmount_discards_state(self, vm, renderer, provider):
        vm.mount()
        provider.succeed(1.0, 1.0)

        vm.unmount()

        assert renderer.exists is False
        assert renderer.removed == 1
        assert vm.location is None
        assert vm.has_marker is False
        assert vm.is_mounted is False

    def test_remount_creates_fresh_map(self, vm, renderer, provider):
        vm.mount()
        provider.succeed(1.0, 1.0)
        vm.unmount()

        vm.mount()
        provider.succeed(2.0, 2.0)

        assert renderer.created == 2
        assert renderer.markers_added == 2
        assert renderer.marker == (2.0, 2.0)

    def test_stale_result_after_unmount_ignored(self, vm, renderer, provider):
        vm.mount()
        vm.unmount()

        provider.succeed(9.0, 9.0, index=0)

        assert vm.location is None
        assert renderer.marker is None

    def test_stale_result_from_old_mount_ignored(self, vm, renderer, provider):
        """Test a slow first request cannot overwrite the new map's reading."""
        vm.mount()
        vm.unmount()
        vm.mount()

        provider.succeed(7.0, 7.0, index=1)
        provider.succeed(9.0, 9.0, index=0)

        assert vm.location == Location(7.0, 7.0)
        assert renderer.marker == (7.0, 7.0)
