import pytest

from mazebuilder.config import AppConfig, BOUND_PROFILES
from mazebuilder.controller.generator import GeneratorResponse
from mazebuilder.exceptions import TransportFailure
from mazebuilder.model.display import DisplayTier, TIERS
from mazebuilder.model.state import RequestState
from mazebuilder.view.main_window import MainWindow

from fakes import FakeGenerator, PendingWorker, WorkerRecorder


@pytest.fixture
def make_window():
    windows = []

    def factory(generator=None, worker_cls=None, config=None):
        recorder = WorkerRecorder(worker_cls) if worker_cls else WorkerRecorder()
        window = MainWindow(config or AppConfig(), generator or FakeGenerator(), worker_factory=recorder)
        window.recorder = recorder
        windows.append(window)
        return window

    yield factory
    for window in windows:
        window.close()


def fill(window, width, height):
    window._inputs["width"].setText(width)
    window._inputs["height"].setText(height)


def test_initial_state(make_window):
    window = make_window()
    assert window.current_tier == TIERS[0]
    assert window.field_error("width") is None
    assert window._hints["width"].text() == "(3 - 52)"
    assert window.btn_build.isEnabled()
    assert not window.btn_cancel.isEnabled()


def test_build_renders_maze(make_window):
    window = make_window(FakeGenerator(GeneratorResponse.ok("+-+-+\n")))
    fill(window, " 40.7", "20")
    window.btn_build.click()

    assert window.controller.state is RequestState.SUCCESS
    assert window.output.toPlainText() == "+-+-+\n"
    assert window._inputs["width"].text() == "40"
    assert window.current_tier == DisplayTier(font_size=14, rows=60, cols=104)
    assert window.output.font().pointSize() == 14


def test_field_errors_shown(make_window):
    window = make_window()
    fill(window, "abc", "100")
    window.btn_build.click()

    assert window.controller.state is RequestState.FAILED
    assert window.field_error("width") == "That's not a number."
    assert window.field_error("height") == "Please make sure the height is between 3 and 33."
    assert window.output.toPlainText() == "Way to go. You broke it."

    fill(window, "10", "10")
    window.btn_build.click()
    assert window.field_error("width") is None
    assert window.field_error("height") is None


def test_failure_message_in_output(make_window):
    window = make_window(FakeGenerator(exc=TransportFailure("timeout")))
    fill(window, "5", "10")
    window.btn_build.click()
    assert "timeout" in window.output.toPlainText()
    assert window.current_tier == TIERS[0]


def test_loading_controls(make_window):
    window = make_window(worker_cls=PendingWorker)
    fill(window, "25", "10")
    window.btn_build.click()

    assert not window.progress.isHidden()
    assert not window.btn_build.isEnabled()
    assert window.btn_cancel.isEnabled()
    assert window.statusBar().currentMessage() == "Building maze..."

    window.btn_cancel.click()
    assert window.progress.isHidden()
    assert window.btn_build.isEnabled()
    assert window.controller.state is RequestState.FAILED
    assert "cancelled" in window.output.toPlainText()


def test_profile_switch_updates_bounds(make_window):
    window = make_window()
    window.profile_combo.setCurrentText("wide")
    assert window.controller.bounds == BOUND_PROFILES["wide"]
    assert window._hints["width"].text() == "(3 - 120)"

    fill(window, "119", "32")
    window.btn_build.click()
    assert window.controller.state is RequestState.SUCCESS
    assert window.current_tier.font_size == 8
