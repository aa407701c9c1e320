"""Location panel: current coordinates, refresh control and the map."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from app.viewmodels.location_vm import LocationVM
from app.views.constants import COORD_DECIMALS, MAP_MIN_HEIGHT, REFRESH_TOOLTIP
from infrastructure.utils import format_local_time

if TYPE_CHECKING:
    from app.views.widgets.map_view import LeafletMapView


class LocationPanel(QWidget):
    """Renders `LocationVM` state; the map widget is the VM's renderer."""

    def __init__(self, map_view: LeafletMapView, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._vm: LocationVM | None = None
        self.map_view = map_view

        root = QVBoxLayout(self)

        header = QHBoxLayout()
        title = QLabel("Your Location")
        title_font = QFont()
        title_font.setPointSize(18)
        title_font.setBold(True)
        title.setFont(title_font)
        header.addWidget(title)
        header.addStretch(1)
        self.btn_refresh = QPushButton("Refresh")
        self.btn_refresh.setToolTip(REFRESH_TOOLTIP)
        header.addWidget(self.btn_refresh)
        root.addLayout(header)

        body = QHBoxLayout()

        side = QVBoxLayout()
        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(
            "color: #991b1b; background: #fee2e2; padding: 12px; border-radius: 6px;"
        )
        self.error_label.setVisible(False)
        side.addWidget(self.error_label)

        self.map_error_label = QLabel()
        self.map_error_label.setWordWrap(True)
        self.map_error_label.setStyleSheet(self.error_label.styleSheet())
        self.map_error_label.setVisible(False)
        side.addWidget(self.map_error_label)

        self.info_frame = QFrame()
        self.info_frame.setFrameShape(QFrame.StyledPanel)
        info = QVBoxLayout(self.info_frame)
        self.lat_label = QLabel()
        self.lon_label = QLabel()
        self.updated_label = QLabel()
        for label in (self.lat_label, self.lon_label, self.updated_label):
            label.setTextInteractionFlags(Qt.TextSelectableByMouse)
            info.addWidget(label)
        self.info_frame.setVisible(False)
        side.addWidget(self.info_frame)
        side.addStretch(1)

        side_widget = QWidget()
        side_widget.setLayout(side)
        body.addWidget(side_widget, 1)

        self.map_view.setMinimumHeight(MAP_MIN_HEIGHT)
        body.addWidget(self.map_view, 2)
        root.addLayout(body, 1)

    def bind(self, vm: LocationVM) -> None:
        """Attach the view-model and render its current state."""
        self._vm = vm
        vm.on_changed = self.render
        self.btn_refresh.clicked.connect(vm.refresh)
        self.render()

    def show_map_error(self, message: str) -> None:
        """Show that the map itself is unavailable; readings still display."""
        self.map_error_label.setText(message)
        self.map_error_label.setVisible(True)

    def render(self) -> None:
        vm = self._vm
        if vm is None:
            return
        self.btn_refresh.setEnabled(vm.can_refresh)
        self.btn_refresh.setText("Locating…" if vm.loading else "Refresh")

        self.error_label.setVisible(bool(vm.error))
        self.error_label.setText(vm.error or "")

        if vm.location is None:
            self.info_frame.setVisible(False)
            return
        self.info_frame.setVisible(True)
        self.lat_label.setText(f"Latitude:  {vm.location.latitude:.{COORD_DECIMALS}f}")
        self.lon_label.setText(f"Longitude: {vm.location.longitude:.{COORD_DECIMALS}f}")
        self.updated_label.setText(f"Last Updated: {format_local_time(vm.last_updated)}")
