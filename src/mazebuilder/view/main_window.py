"""
Main Application Window
=======================
The GUI container: the two dimension fields, the Build/Cancel buttons, the
loading indicator and the monospace text area the maze is shown in.

Why is this file needed?
------------------------
1. Layout: it organizes the visual structure of the application.
2. Presentation: it implements the presenter interface the
   MazeRequestController drives (field errors, loading indicator, output).
   It holds no request logic of its own.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QFont, QFontDatabase, QFontMetrics
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QLineEdit,
    QPushButton, QProgressBar, QPlainTextEdit, QScrollArea, QComboBox, QGroupBox
)

from mazebuilder.config import AppConfig, BOUND_PROFILES, VISIBLE_APP_NAME
from mazebuilder.controller.generator import MazeGenerator
from mazebuilder.controller.request import MazeRequestController, WorkerFactory
from mazebuilder.model.bounds import DimensionBounds, FIELD_NAMES
from mazebuilder.model.display import DisplayTier, TIERS
from mazebuilder.model.state import RequestState

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    RequestState.IDLE: "Ready.",
    RequestState.VALIDATING: "Checking input...",
    RequestState.LOADING: "Building maze...",
    RequestState.SUCCESS: "Maze built.",
    RequestState.FAILED: "Something went wrong.",
}

# Room for the frame and scrollbars around the text
_OUTPUT_MARGIN_PX = 24


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: AppConfig,
        generator: MazeGenerator,
        worker_factory: Optional[WorkerFactory] = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1100, 900)

        self.current_tier: Optional[DisplayTier] = None
        self._inputs: dict[str, QLineEdit] = {}
        self._hints: dict[str, QLabel] = {}
        self._errors: dict[str, QLabel] = {}

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # --- 1. INPUTS ---
        grp = QGroupBox("Maze Size")
        grid = QGridLayout(grp)

        self.profile_combo = QComboBox()
        for name in BOUND_PROFILES:
            self.profile_combo.addItem(name)
        if config.profile_name not in BOUND_PROFILES:
            self.profile_combo.addItem(config.profile_name)
        self.profile_combo.setCurrentText(config.profile_name)
        grid.addWidget(QLabel("Profile:"), 0, 0)
        grid.addWidget(self.profile_combo, 0, 1)

        for row, name in enumerate(FIELD_NAMES, start=1):
            edit = QLineEdit()
            edit.setPlaceholderText(name)
            edit.returnPressed.connect(self.on_build_clicked)

            hint = QLabel()
            hint.setStyleSheet("color: gray;")

            error = QLabel()
            error.setStyleSheet("color: red;")
            error.setVisible(False)

            grid.addWidget(QLabel(f"{name.capitalize()}:"), row, 0)
            grid.addWidget(edit, row, 1)
            grid.addWidget(hint, row, 2)
            grid.addWidget(error, row, 3)

            self._inputs[name] = edit
            self._hints[name] = hint
            self._errors[name] = error

        main_layout.addWidget(grp)

        # --- 2. ACTIONS ---
        hbox = QHBoxLayout()
        self.btn_build = QPushButton("Build Maze")
        self.btn_build.setMinimumHeight(40)
        self.btn_build.clicked.connect(self.on_build_clicked)
        hbox.addWidget(self.btn_build)

        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.setMinimumHeight(40)
        self.btn_cancel.setEnabled(False)
        self.btn_cancel.clicked.connect(self.on_cancel_clicked)
        hbox.addWidget(self.btn_cancel)

        self.progress = QProgressBar()
        self.progress.setRange(0, 0)  # Indeterminate while loading
        self.progress.setVisible(False)
        hbox.addWidget(self.progress, 1)
        main_layout.addLayout(hbox)

        # --- 3. OUTPUT ---
        self.output = QPlainTextEdit()
        self.output.setReadOnly(True)
        self.output.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.output.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))

        scroll = QScrollArea()
        scroll.setWidget(self.output)
        scroll.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)
        main_layout.addWidget(scroll, 1)

        self.statusBar().showMessage(STATUS_TEXT[RequestState.IDLE])

        # --- CONTROLLER ---
        self.controller = MazeRequestController(
            presenter=self,
            bounds=config.bounds,
            generator=generator,
            timeout_s=config.generator.timeout_s,
            worker_factory=worker_factory,
            parent=self,
        )
        self.controller.state_changed.connect(self.on_state_changed)
        self.profile_combo.currentTextChanged.connect(self.on_profile_changed)

        self._update_hints(config.bounds)
        self.apply_tier(TIERS[0])

    # --- PRESENTER INTERFACE ---

    def show_field_error(self, field_name: str, message: str) -> None:
        label = self._errors[field_name]
        label.setText(message)
        label.setVisible(True)

    def hide_field_error(self, field_name: str) -> None:
        label = self._errors[field_name]
        label.clear()
        label.setVisible(False)

    def set_field_value(self, field_name: str, value: int) -> None:
        self._inputs[field_name].setText(str(value))

    def set_loading(self, visible: bool) -> None:
        self.progress.setVisible(visible)
        self.btn_build.setEnabled(not visible)
        self.btn_cancel.setEnabled(visible)
        self.profile_combo.setEnabled(not visible)

    def render_output(self, text: str, tier: Optional[DisplayTier]) -> None:
        if tier is not None:
            self.apply_tier(tier)
        self.output.setPlainText(text)

    # --- HELPERS ---

    def field_error(self, field_name: str) -> Optional[str]:
        """Text of the visible error next to a field, None if hidden."""
        label = self._errors[field_name]
        return label.text() if not label.isHidden() else None

    def apply_tier(self, tier: DisplayTier) -> None:
        """Sizes the output like a text area of `tier.rows` x `tier.cols` characters."""
        font = QFont(self.output.font())
        font.setPointSize(tier.font_size)
        self.output.setFont(font)

        metrics = QFontMetrics(font)
        width = metrics.horizontalAdvance("M") * tier.cols + _OUTPUT_MARGIN_PX
        height = metrics.lineSpacing() * tier.rows + _OUTPUT_MARGIN_PX
        self.output.setFixedSize(width, height)
        self.current_tier = tier
        logger.debug(f"Applied display tier {tier}")

    def _update_hints(self, bounds: DimensionBounds) -> None:
        for name in FIELD_NAMES:
            lo, hi = bounds.for_field(name)
            self._hints[name].setText(f"({lo} - {hi})")

    # --- SLOTS ---

    def on_build_clicked(self) -> None:
        self.controller.submit(self._inputs["width"].text(), self._inputs["height"].text())

    def on_cancel_clicked(self) -> None:
        self.controller.cancel()

    def on_profile_changed(self, name: str) -> None:
        bounds = BOUND_PROFILES.get(name, self.config.bounds)
        self.controller.set_bounds(bounds)
        self._update_hints(bounds)

    def on_state_changed(self, state: RequestState) -> None:
        self.statusBar().showMessage(STATUS_TEXT[state])

    def closeEvent(self, event: QCloseEvent) -> None:
        self.controller.shutdown()
        super().closeEvent(event)
