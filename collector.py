"""
Gesture Input Collector

Purpose: hold the simulator's current gesture / command / selected text, debounce triggers and
submit one snapshot per quiet window to the workflow proxy.

Input: user selections + trigger() calls.

Output: last_result (WorkflowResult) and a haptic indicator pulse unless feedback is "none".

Example:
    collector = GestureInputCollector(HttpWorkflowSender("http://localhost:3000"))
    collector.select_gesture(Gesture.ring_rotate_cw)
    collector.trigger(); collector.trigger(); collector.trigger()   # -> one POST, 200 ms later

Notes: trailing-edge debounce. Triggers are ignored while a request is in flight.
Failures are logged and leave last_result untouched; there is no retry.
"""
from typing import Callable, Optional
import logging
import threading

import requests

import config
from models import Command, Gesture, GestureEvent, HapticFeedback, WorkflowResult

logger = logging.getLogger(__name__)


class HttpWorkflowSender:
    """POSTs a GestureEvent to /api/workflow and returns the WorkflowResult."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.WORKFLOW_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.WORKFLOW_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/workflow"

    def __call__(self, event: GestureEvent) -> WorkflowResult:
        response = requests.post(
            self.endpoint,
            json=event.model_dump(mode="json"),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout
        )
        response.raise_for_status()
        return WorkflowResult.model_validate(response.json())


class HapticIndicator:
    """Simulated device LED/vibration: active for a short pulse, then resets."""

    def __init__(self, duration: float = config.HAPTIC_PULSE_SECONDS):
        self.duration = duration
        self.active = False
        self.kind = HapticFeedback.none
        self._timer: Optional[threading.Timer] = None

    def pulse(self, kind: HapticFeedback) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self.active = True
        self.kind = kind
        self._timer = threading.Timer(self.duration, self._reset)
        self._timer.daemon = True
        self._timer.start()

    def _reset(self) -> None:
        self.active = False


class GestureInputCollector:
    """Debounced submitter for the gesture simulator."""

    def __init__(
        self,
        send: Callable[[GestureEvent], WorkflowResult],
        wait: float = config.DEBOUNCE_MS / 1000,
        on_result: Optional[Callable[[WorkflowResult], None]] = None,
        on_haptic: Optional[Callable[[HapticFeedback], None]] = None,
        haptic: Optional[HapticIndicator] = None
    ):
        self.send = send
        self.wait = wait
        self.on_result = on_result
        self.on_haptic = on_haptic
        self.haptic = haptic or HapticIndicator()

        self.gesture = Gesture.thumb_press
        self.command = Command.health_dashboard
        self.selected_text = ""
        self.last_result: Optional[WorkflowResult] = None

        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[GestureEvent] = None
        self._loading = False
        # cleared while a submission (send + callbacks) is running
        self._idle = threading.Event()
        self._idle.set()

    # ── current input ──────────────────────────────────────────

    def select_gesture(self, gesture: Gesture) -> None:
        self.gesture = Gesture(gesture)

    def select_command(self, command: Command) -> None:
        self.command = Command(command)

    def set_selected_text(self, text: str) -> None:
        self.selected_text = text or ""

    def snapshot(self) -> GestureEvent:
        return GestureEvent(
            gesture=self.gesture,
            selected_text=self.selected_text,
            command=self.command
        )

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def pending(self) -> bool:
        return self._pending is not None

    # ── debounce ───────────────────────────────────────────────

    def trigger(self) -> bool:
        """Schedule a submission of the current snapshot. Returns False if ignored."""
        with self._lock:
            if self._loading:
                logger.debug("[Collector] Request in flight, trigger ignored")
                return False

            if self._timer is not None:
                self._timer.cancel()

            self._pending = self.snapshot()
            self._timer = threading.Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()
            return True

    def flush(self) -> Optional[WorkflowResult]:
        """Send the pending submission now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            event = self._take_pending()
        if event is None:
            return None
        return self._submit(event)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Flush any pending trigger, then block until the in-flight submission finishes."""
        self.flush()
        return self._idle.wait(timeout)

    def _fire(self) -> None:
        with self._lock:
            # a newer trigger replaced this timer after it started
            if threading.current_thread() is not self._timer:
                return
            self._timer = None
            event = self._take_pending()
        if event is not None:
            self._submit(event)

    def _take_pending(self) -> Optional[GestureEvent]:
        """Must hold _lock. Marks the collector as loading when an event is taken."""
        event, self._pending = self._pending, None
        if event is not None:
            self._loading = True
            self._idle.clear()
        return event

    # ── submission ─────────────────────────────────────────────

    def _submit(self, event: GestureEvent) -> Optional[WorkflowResult]:
        try:
            return self._send_and_render(event)
        finally:
            self._idle.set()

    def _send_and_render(self, event: GestureEvent) -> Optional[WorkflowResult]:
        try:
            result = self.send(event)
        except Exception as e:
            logger.error(f"[Collector] Workflow request failed: {e}", exc_info=True)
            return None
        finally:
            with self._lock:
                self._loading = False

        self.last_result = result
        if self.on_result is not None:
            self.on_result(result)

        if result.haptic_feedback != HapticFeedback.none:
            self.haptic.pulse(result.haptic_feedback)
            if self.on_haptic is not None:
                self.on_haptic(result.haptic_feedback)

        return result
