"""Device position access through Qt Positioning.

Wraps `QGeoPositionInfoSource` behind the callback-style `PositionProvider`
protocol. Signals arrive on the GUI thread, so callbacks run there too.
"""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QDateTime, QObject
from PySide6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource
from loguru import logger

from core.models import Location
from core.services.interfaces import PositionOptions

_Pending = tuple[Callable[[Location], None], Callable[[str], None]]


class QtPositionProvider(QObject):
    """One-shot position requests against the platform's default source."""

    def __init__(
        self, parent: QObject | None = None, source: QGeoPositionInfoSource | None = None
    ) -> None:
        super().__init__(parent)
        self._source = source or QGeoPositionInfoSource.createDefaultSource(self)
        self._pending: _Pending | None = None
        if self._source is None:
            logger.warning("No positioning source available on this platform")
            return
        logger.info("Positioning source: {}", self._source.sourceName())
        self._source.positionUpdated.connect(self._on_position_updated)
        self._source.errorOccurred.connect(self._on_error)

    def is_available(self) -> bool:
        return self._source is not None

    def request_position(
        self,
        options: PositionOptions,
        on_success: Callable[[Location], None],
        on_error: Callable[[str], None],
    ) -> None:
        """Ask the source for a single reading, honoring `options`."""
        if self._source is None:
            on_error("positioning unavailable")
            return

        methods = QGeoPositionInfoSource.PositioningMethod
        self._source.setPreferredPositioningMethods(
            methods.SatellitePositioningMethods
            if options.enable_high_accuracy
            else methods.AllPositioningMethods
        )

        if options.maximum_age_ms > 0:
            cached = self._fresh_cached_position(options.maximum_age_ms)
            if cached is not None:
                on_success(cached)
                return

        self._pending = (on_success, on_error)
        self._source.requestUpdate(int(options.timeout_ms))

    def _fresh_cached_position(self, maximum_age_ms: int) -> Location | None:
        info = self._source.lastKnownPosition()
        if not info.isValid() or not info.coordinate().isValid():
            return None
        age_ms = info.timestamp().msecsTo(QDateTime.currentDateTime())
        if age_ms < 0 or age_ms > maximum_age_ms:
            return None
        coord = info.coordinate()
        return Location(latitude=coord.latitude(), longitude=coord.longitude())

    def _on_position_updated(self, info: QGeoPositionInfo) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        on_success, on_error = pending
        coord = info.coordinate()
        if not coord.isValid():
            on_error("invalid coordinate")
            return
        on_success(Location(latitude=coord.latitude(), longitude=coord.longitude()))

    def _on_error(self, error: QGeoPositionInfoSource.Error) -> None:
        pending, self._pending = self._pending, None
        logger.warning("Positioning error: {}", error)
        if pending is None:
            return
        _on_success, on_error = pending
        on_error(str(error))
