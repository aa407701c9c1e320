"""ViewModel for location acquisition and map marker synchronization."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger

from core.models import Location
from core.services.interfaces import MapRenderer, PositionOptions, PositionProvider
from core.services.theme_service import tile_source_for

NOT_SUPPORTED_MESSAGE = "Geolocation is not supported on this device"
UNAVAILABLE_MESSAGE = "Unable to retrieve your location"

INITIAL_CENTER = (0.0, 0.0)
INITIAL_ZOOM = 2
LOCATED_ZOOM = 15
PAN_DURATION_S = 1.0


class LocationVM:
    """Tracks the latest reading and keeps a single map marker in sync.

    Exactly one request is in flight at a time: `refresh` is ignored while
    loading. Failed requests keep the previous reading and marker.
    """

    def __init__(
        self,
        provider: PositionProvider,
        renderer: MapRenderer,
        options: PositionOptions | None = None,
        is_dark: bool = False,
        located_zoom: int = LOCATED_ZOOM,
        initial_zoom: int = INITIAL_ZOOM,
        on_changed: Callable[[], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a LocationVM.

        Args:
            provider: Position provider used for every acquisition.
            renderer: Map renderer owning the map, tile layer and marker.
            options: Request options (high accuracy, 5 s timeout, no cache).
            is_dark: Initial theme used to pick the tile source.
            located_zoom: Zoom used when centering on a reading.
            initial_zoom: Zoom of the freshly created world view.
            on_changed: Called after every state change for view refresh.
            clock: Returns the current time for "last updated".
        """
        self._provider = provider
        self._renderer = renderer
        self._options = options or PositionOptions()
        self._is_dark = bool(is_dark)
        self._located_zoom = located_zoom
        self._initial_zoom = initial_zoom
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.on_changed = on_changed

        self.location: Location | None = None
        self.last_updated: datetime | None = None
        self.error: str | None = None
        self.loading = False
        self._mounted = False
        self._has_marker = False
        self._request_seq = 0

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def has_marker(self) -> bool:
        return self._has_marker

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    @property
    def can_refresh(self) -> bool:
        return self._mounted and not self.loading

    def mount(self) -> None:
        """Create the map once and start the first acquisition."""
        if self._mounted:
            return
        self._mounted = True
        self._renderer.create_map(INITIAL_CENTER, self._initial_zoom)
        source = tile_source_for(self._is_dark)
        self._renderer.set_tile_source(source)
        logger.info("Map mounted ({} tiles)", source.name)
        self.refresh()

    def unmount(self) -> None:
        """Tear the map down and forget the marker and the reading."""
        if not self._mounted:
            return
        self._renderer.remove_map()
        self._mounted = False
        self._has_marker = False
        self.location = None
        self.last_updated = None
        self.error = None
        self.loading = False
        # Results of requests issued before this point are ignored.
        self._request_seq += 1
        logger.info("Map unmounted")
        self._changed()

    def refresh(self) -> bool:
        """Issue a one-shot position request. Returns False if not started."""
        if not self._mounted:
            return False
        if self.loading:
            logger.debug("Location request already pending, refresh ignored")
            return False

        self.loading = True
        self.error = None
        self._changed()

        if not self._provider.is_available():
            self._fail(NOT_SUPPORTED_MESSAGE)
            return False

        self._request_seq += 1
        seq = self._request_seq
        self._provider.request_position(
            self._options,
            lambda loc: self._on_position(seq, loc),
            lambda reason: self._on_position_error(seq, reason),
        )
        return True

    def set_dark(self, is_dark: bool) -> None:
        """Swap tile source for the new theme; marker and viewport stay."""
        is_dark = bool(is_dark)
        if is_dark == self._is_dark:
            return
        self._is_dark = is_dark
        if self._mounted:
            source = tile_source_for(is_dark)
            self._renderer.set_tile_source(source)
            logger.info("Tile source switched to {}", source.name)
        self._changed()

    def _on_position(self, seq: int, location: Location) -> None:
        if seq != self._request_seq or not self._mounted:
            logger.debug("Stale position result ignored")
            return
        self.location = location
        self.last_updated = self._clock()
        position = location.as_tuple()
        self._renderer.set_view(
            position, self._located_zoom, animate=True, duration_s=PAN_DURATION_S
        )
        if self._has_marker:
            self._renderer.move_marker(position)
        else:
            self._renderer.add_marker(position)
            self._has_marker = True
        self.error = None
        self.loading = False
        logger.info("Location updated: {:.6f}, {:.6f}", location.latitude, location.longitude)
        self._changed()

    def _on_position_error(self, seq: int, reason: str) -> None:
        if seq != self._request_seq or not self._mounted:
            logger.debug("Stale position error ignored: {}", reason)
            return
        self._fail(UNAVAILABLE_MESSAGE, reason)

    def _fail(self, message: str, reason: str | None = None) -> None:
        logger.warning("Location request failed: {} ({})", message, reason or "no detail")
        self.error = message
        self.loading = False
        self._changed()

    def _changed(self) -> None:
        if self.on_changed is not None:
            self.on_changed()
