"""
Maze Request Controller
=======================
Orchestrates one maze request from the Build button to the rendered text.

Why is this file needed?
------------------------
1. Validation: both fields are always validated, so the user sees every
   error at once, and invalid input never reaches the generator.
2. State: it owns the single RequestState (idle -> validating -> loading ->
   success | failed) and refuses a second submission while one is in flight.
3. Sizing: once the generator answers (or fails, or is cancelled) the
   display tier for the *submitted* size is applied together with the text.

The controller never touches widgets directly. It drives a presenter (the
main window in the application, a recorder in the tests).
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, Signal, Slot

from mazebuilder.controller.generator import DEFAULT_TIMEOUT_S, MazeGenerator
from mazebuilder.controller.workers import GeneratorWorker
from mazebuilder.exceptions import GeneratorCancelled
from mazebuilder.model.bounds import DimensionBounds
from mazebuilder.model.display import DisplayTier, select_tier
from mazebuilder.model.state import MazeRequest, RequestState
from mazebuilder.model.validation import error_message, validate_dimensions

logger = logging.getLogger(__name__)

VALIDATION_FAILED_TEXT = "Way to go. You broke it."
INTERNAL_ERROR_TEMPLATE = "Sorry, an internal error has occurred: {detail}"


class MazePresenter(Protocol):
    def show_field_error(self, field_name: str, message: str) -> None: ...
    def hide_field_error(self, field_name: str) -> None: ...
    def set_field_value(self, field_name: str, value: int) -> None: ...
    def set_loading(self, visible: bool) -> None: ...
    def render_output(self, text: str, tier: Optional[DisplayTier]) -> None: ...


WorkerFactory = Callable[[MazeRequest, MazeGenerator, float, QObject], GeneratorWorker]


def _default_worker_factory(
    request: MazeRequest, generator: MazeGenerator, timeout_s: float, parent: QObject
) -> GeneratorWorker:
    return GeneratorWorker(request, generator, timeout_s=timeout_s, parent=parent)


class MazeRequestController(QObject):
    state_changed = Signal(object)

    def __init__(
        self,
        presenter: MazePresenter,
        bounds: DimensionBounds,
        generator: MazeGenerator,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        worker_factory: Optional[WorkerFactory] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.presenter = presenter
        self.generator = generator
        self.timeout_s = timeout_s
        self._bounds = bounds
        self._worker_factory = worker_factory or _default_worker_factory

        self._state = RequestState.IDLE
        self._last_request_id = 0
        self._active_request: Optional[MazeRequest] = None
        self._worker: Optional[GeneratorWorker] = None
        # Cancelled workers keep running until their generator call returns
        self._live_workers: set[GeneratorWorker] = set()

    # --- PROPERTIES ---

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def bounds(self) -> DimensionBounds:
        return self._bounds

    @property
    def active_request(self) -> Optional[MazeRequest]:
        return self._active_request

    def set_bounds(self, bounds: DimensionBounds) -> None:
        """Swaps the bounds profile. Not allowed while a maze is loading."""
        if self._state is RequestState.LOADING:
            raise RuntimeError("Cannot change bounds while a maze is loading.")
        self._bounds = bounds
        logger.info(f"Bounds changed to {bounds}")

    # --- PUBLIC API ---

    def submit(self, raw_width: Optional[str], raw_height: Optional[str]) -> bool:
        """
        Handles one press of the Build button.

        Returns:
            False if the submission was rejected because a request is
            already loading, True otherwise (even when validation failed).
        """
        if self._state is RequestState.LOADING:
            logger.warning("Submission rejected: a maze request is already in flight.")
            return False

        self._set_state(RequestState.VALIDATING)
        width, height = validate_dimensions(raw_width, raw_height, self._bounds)

        for result in (width, height):
            if result.ok:
                self.presenter.hide_field_error(result.field_name)
                self.presenter.set_field_value(result.field_name, result.normalized_value)
            else:
                self.presenter.show_field_error(result.field_name, error_message(result))

        if not (width.ok and height.ok):
            logger.info(f"Validation failed for width={raw_width!r} height={raw_height!r}")
            self.presenter.render_output(VALIDATION_FAILED_TEXT, None)
            self._set_state(RequestState.FAILED)
            return True

        self._last_request_id += 1
        request = MazeRequest(self._last_request_id, width.normalized_value, height.normalized_value)
        self._active_request = request
        self._set_state(RequestState.LOADING)
        self.presenter.set_loading(True)

        worker = self._worker_factory(request, self.generator, self.timeout_s, self)
        worker.succeeded.connect(self._on_generator_succeeded)
        worker.failed.connect(self._on_generator_failed)
        worker.finished.connect(self._on_worker_finished)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        self._live_workers.add(worker)
        worker.start()
        return True

    def cancel(self) -> bool:
        """Abandons the in-flight request. Returns False if nothing was loading."""
        if self._state is not RequestState.LOADING:
            return False

        logger.info(f"Cancelling maze request #{self._active_request.request_id}")
        if self._worker is not None:
            self._worker.stop()
        self._finish(INTERNAL_ERROR_TEMPLATE.format(detail=GeneratorCancelled()), RequestState.FAILED)
        return True

    def shutdown(self, wait_ms: int = 2000) -> None:
        """Stops running workers before the application exits."""
        if self._state is RequestState.LOADING:
            self.cancel()
        for worker in list(self._live_workers):
            worker.stop()
            if not worker.wait(wait_ms):
                logger.warning("Generator worker did not stop in time.")

    # --- SLOTS ---

    @Slot(int, str)
    def _on_generator_succeeded(self, request_id: int, text: str) -> None:
        if not self._is_active(request_id):
            logger.debug(f"Ignoring late result of request #{request_id}")
            return
        logger.info(f"Maze #{request_id} received ({len(text)} characters)")
        self._finish(text, RequestState.SUCCESS)

    @Slot(int, str)
    def _on_generator_failed(self, request_id: int, detail: str) -> None:
        if not self._is_active(request_id):
            logger.debug(f"Ignoring late failure of request #{request_id}: {detail}")
            return
        logger.error(f"Maze #{request_id} failed: {detail}")
        self._finish(INTERNAL_ERROR_TEMPLATE.format(detail=detail), RequestState.FAILED)

    @Slot()
    def _on_worker_finished(self) -> None:
        self._live_workers.discard(self.sender())

    # --- HELPERS ---

    def _is_active(self, request_id: int) -> bool:
        return (self._state is RequestState.LOADING
                and self._active_request is not None
                and self._active_request.request_id == request_id)

    def _finish(self, text: str, state: RequestState) -> None:
        request = self._active_request
        self._active_request = None
        self._worker = None

        self.presenter.set_loading(False)
        # Sized from what was asked for, not from what came back
        tier = select_tier(request.width, request.height, self._bounds)
        self.presenter.render_output(text, tier)
        self._set_state(state)

    def _set_state(self, state: RequestState) -> None:
        logger.debug(f"Request state: {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state)
