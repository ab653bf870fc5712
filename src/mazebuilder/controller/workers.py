"""
Background Workers (Threading)
==============================
This module contains the QThread subclass that talks to the external maze
generator.

Why is this file needed?
------------------------
1. Responsiveness: the generator may take seconds (or hang until its
   timeout). Running it on the main thread would freeze the GUI.
2. Signals: the outcome travels back to the GUI thread through Qt Signals,
   so the controller's state is only ever touched from the main thread.

Classes:
    GeneratorWorker: Runs one generator call for one MazeRequest.
"""
import logging
import threading

from PySide6.QtCore import QThread, Signal

from mazebuilder.controller.generator import DEFAULT_TIMEOUT_S, MazeGenerator
from mazebuilder.exceptions import TransportFailure
from mazebuilder.model.state import MazeRequest

logger = logging.getLogger(__name__)


class GeneratorWorker(QThread):
    # (request_id, maze text)
    succeeded = Signal(int, str)
    # (request_id, failure detail)
    failed = Signal(int, str)

    def __init__(
        self,
        request: MazeRequest,
        generator: MazeGenerator,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.request = request
        self.generator = generator
        self.timeout_s = timeout_s
        self.cancel_event = threading.Event()

    def run(self) -> None:
        req = self.request
        logger.info(f"Requesting maze #{req.request_id} ({req.width}x{req.height}) from {self.generator.describe()}")
        try:
            response = self.generator.generate(
                req.width,
                req.height,
                timeout_s=self.timeout_s,
                cancel_event=self.cancel_event,
            )
        except TransportFailure as e:
            logger.warning(f"Generator transport failed for request #{req.request_id}: {e}")
            self.failed.emit(req.request_id, str(e))
            return
        except Exception as e:
            logger.exception(f"Error in GeneratorWorker for request #{req.request_id}")
            self.failed.emit(req.request_id, str(e) or e.__class__.__name__)
            return

        if response.is_ok:
            self.succeeded.emit(req.request_id, response.body)
        else:
            logger.warning(f"Generator reported an error for request #{req.request_id}: {response.detail}")
            self.failed.emit(req.request_id, response.detail)

    def stop(self) -> None:
        """Trips the cancellation token; the generator call gives up at its next check."""
        self.cancel_event.set()
