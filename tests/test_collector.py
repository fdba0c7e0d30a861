import threading
import time

import pytest
import requests

from collector import GestureInputCollector, HapticIndicator, HttpWorkflowSender
from conftest import FakeResponse
from models import Command, Gesture, GestureEvent, HapticFeedback, WorkflowResult

RESULT = WorkflowResult(
    action="code_insert",
    content="const { data } = usePatients();",
    haptic_feedback="long_pulse",
    next_gesture="Thumb press to insert",
)


class RecordingSender:
    def __init__(self, result=RESULT, error=None, block=None):
        self.result = result
        self.error = error
        self.block = block
        self.events = []
        self.done = threading.Event()

    def __call__(self, event):
        self.events.append(event)
        try:
            if self.block is not None:
                self.block.wait(2)
            if self.error is not None:
                raise self.error
            return self.result
        finally:
            self.done.set()


def test_three_triggers_within_window_send_once():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=0.2)

    collector.trigger()
    collector.trigger()
    collector.trigger()

    assert sender.done.wait(2)
    time.sleep(0.3)
    assert len(sender.events) == 1


def test_last_snapshot_wins():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=0.1)

    collector.select_gesture(Gesture.ring_rotate_cw)
    collector.trigger()
    collector.select_command(Command.patient_api)
    collector.set_selected_text("fetchPatients()")
    collector.trigger()

    assert sender.done.wait(2)
    assert sender.events == [
        GestureEvent(gesture=Gesture.ring_rotate_cw, selected_text="fetchPatients()", command=Command.patient_api)
    ]


def test_triggers_spaced_beyond_window_send_each():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=0.02)

    collector.trigger()
    assert sender.done.wait(2)
    sender.done.clear()
    time.sleep(0.05)
    collector.trigger()
    assert sender.done.wait(2)
    assert len(sender.events) == 2


def test_flush_sends_pending_immediately():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=10)

    collector.trigger()
    assert collector.pending
    assert collector.flush() == RESULT
    assert len(sender.events) == 1
    assert not collector.pending
    assert collector.flush() is None


def test_cancel_drops_pending():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=0.05)

    collector.trigger()
    collector.cancel()
    time.sleep(0.15)
    assert sender.events == []


def test_trigger_ignored_while_in_flight():
    release = threading.Event()
    sender = RecordingSender(block=release)
    collector = GestureInputCollector(sender, wait=0.01)

    collector.trigger()
    deadline = time.time() + 2
    while not collector.loading and time.time() < deadline:
        time.sleep(0.005)
    assert collector.loading
    assert collector.trigger() is False

    release.set()
    assert sender.done.wait(2)
    deadline = time.time() + 2
    while collector.loading and time.time() < deadline:
        time.sleep(0.005)
    assert not collector.loading
    assert len(sender.events) == 1


def test_success_updates_result_and_pulses_haptic():
    results, haptics = [], []
    collector = GestureInputCollector(
        RecordingSender(),
        wait=10,
        on_result=results.append,
        on_haptic=haptics.append,
        haptic=HapticIndicator(duration=10),
    )

    collector.trigger()
    collector.flush()

    assert collector.last_result == RESULT
    assert results == [RESULT]
    assert haptics == [HapticFeedback.long_pulse]
    assert collector.haptic.active
    assert collector.haptic.kind == HapticFeedback.long_pulse


def test_no_haptic_pulse_for_none():
    quiet = WorkflowResult(
        action="notification",
        content="Select code first.",
        haptic_feedback="none",
        next_gesture="Ring rotate to pick a command",
    )
    haptics = []
    collector = GestureInputCollector(RecordingSender(result=quiet), wait=10, on_haptic=haptics.append)

    collector.trigger()
    collector.flush()

    assert collector.last_result == quiet
    assert haptics == []
    assert not collector.haptic.active


def test_failure_leaves_previous_result():
    sender = RecordingSender()
    results = []
    collector = GestureInputCollector(sender, wait=10, on_result=results.append)
    collector.trigger()
    collector.flush()

    sender.error = requests.exceptions.ConnectionError("proxy down")
    collector.trigger()
    assert collector.flush() is None

    assert collector.last_result == RESULT
    assert results == [RESULT]
    assert not collector.loading


def test_haptic_indicator_resets_after_pulse():
    indicator = HapticIndicator(duration=0.02)
    indicator.pulse(HapticFeedback.short_vibrate)
    assert indicator.active
    time.sleep(0.1)
    assert not indicator.active


def test_http_sender_posts_snapshot(monkeypatch):
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append((url, json))
        return FakeResponse(RESULT.model_dump(mode="json"))

    monkeypatch.setattr(requests, "post", fake_post)
    sender = HttpWorkflowSender("http://proxy.test/")
    event = GestureEvent(gesture=Gesture.thumb_press, command=Command.health_dashboard)

    assert sender(event) == RESULT
    assert calls == [(
        "http://proxy.test/api/workflow",
        {"gesture": "thumb_press", "selected_text": "", "command": "health_dashboard"},
    )]


def test_http_sender_raises_on_config_error(monkeypatch):
    monkeypatch.setattr(
        requests, "post",
        lambda *a, **kw: FakeResponse({"error": "GEMINI_API_KEY is not set"}, status_code=500),
    )
    with pytest.raises(requests.exceptions.HTTPError):
        HttpWorkflowSender("http://proxy.test")(GestureEvent(gesture="thumb_press", command="patient_api"))


def test_wait_idle_blocks_until_timer_fired_request_finishes():
    release = threading.Event()
    results = []
    collector = GestureInputCollector(RecordingSender(block=release), wait=0.01, on_result=results.append)

    collector.trigger()
    deadline = time.time() + 2
    while not collector.loading and time.time() < deadline:
        time.sleep(0.005)
    assert collector.loading

    threading.Timer(0.1, release.set).start()
    assert collector.wait_idle(timeout=2)
    assert results == [RESULT]
    assert collector.last_result == RESULT


def test_wait_idle_sends_pending_trigger():
    sender = RecordingSender()
    collector = GestureInputCollector(sender, wait=10)

    collector.trigger()
    assert collector.wait_idle(timeout=2)
    assert len(sender.events) == 1
    assert collector.wait_idle(timeout=0.1)


def test_http_sender_timeout_defaults_to_config(monkeypatch):
    import config

    monkeypatch.setattr(config, "WORKFLOW_TIMEOUT", 12.5)
    assert HttpWorkflowSender("http://proxy.test").timeout == 12.5
    assert HttpWorkflowSender("http://proxy.test", timeout=3).timeout == 3
