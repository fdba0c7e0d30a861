"""
Console gesture simulator

Purpose: stand-in for the MX Master4 / Creative Console plugin UI. Pick a gesture and a
command, optionally paste selected code, then trigger the workflow.

Input: keyboard commands on stdin.

Output: the WorkflowResult printed to stdout, plus a haptic line when feedback is not "none".

Example:
    $ python UI_main.py --url http://localhost:3000
    > g 1          (ring_rotate_cw)
    > c 2          (patient_api)
    > t const x = 1;
    > go
"""
import argparse
import sys

import config
from collector import GestureInputCollector, HttpWorkflowSender
from log import setup_logging
from models import Command, Gesture, HapticFeedback, WorkflowResult

GESTURES = [
    (Gesture.ring_rotate_cw, "Ring Rotate", "Scroll or cycle options"),
    (Gesture.thumb_press, "Thumb Press", "Primary action / Select"),
    (Gesture.console_dial1_press, "Console Dial", "Secondary adjustment"),
]

COMMANDS = [
    (Command.refactor_telehealth, "Refactor Telehealth", "Optimize existing RN code"),
    (Command.patient_api, "Patient API", "Generate fetch/post logic"),
    (Command.health_dashboard, "Health Dashboard", "Create vitals visualization"),
]

HELP = """Commands:
  g <n>      select gesture
  c <n>      select command
  t <text>   set selected code context (empty to clear)
  go         trigger workflow
  s          show current input
  q          quit"""


def render_result(result: WorkflowResult) -> None:
    print("=" * 60)
    print(f"Action:         {result.action.value}")
    print(f"Haptic:         {result.haptic_feedback.value.replace('_', ' ')}")
    print(f"Next gesture:   {result.next_gesture}")
    print("-" * 60)
    print(result.content)
    print("=" * 60)


def render_haptic(kind: HapticFeedback) -> None:
    print(f"📳 {kind.value.replace('_', ' ')}")


def print_menu(collector: GestureInputCollector) -> None:
    print("Gestures:")
    for i, (gesture, label, desc) in enumerate(GESTURES, 1):
        mark = "*" if collector.gesture == gesture else " "
        print(f" {mark}{i}. {label} - {desc}")
    print("Commands:")
    for i, (command, label, desc) in enumerate(COMMANDS, 1):
        mark = "*" if collector.command == command else " "
        print(f" {mark}{i}. {label} - {desc}")
    print(f"Selected text: {collector.selected_text!r}")


def handle_line(collector: GestureInputCollector, line: str) -> bool:
    """Apply one input line. Returns False when the user asked to quit."""
    cmd, _, arg = line.strip().partition(" ")

    if cmd == "q":
        return False
    if cmd == "g" and arg.isdigit() and 1 <= int(arg) <= len(GESTURES):
        collector.select_gesture(GESTURES[int(arg) - 1][0])
    elif cmd == "c" and arg.isdigit() and 1 <= int(arg) <= len(COMMANDS):
        collector.select_command(COMMANDS[int(arg) - 1][0])
    elif cmd == "t":
        collector.set_selected_text(arg)
    elif cmd == "go":
        if not collector.trigger():
            print("⏳ Request in flight...")
    elif cmd == "s":
        print_menu(collector)
    else:
        print(HELP)
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Console gesture simulator for the workflow proxy")
    parser.add_argument("--url", default=config.WORKFLOW_API_URL, help="Workflow proxy base URL")
    parser.add_argument("--timeout", type=float, default=config.WORKFLOW_TIMEOUT, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    setup_logging()
    collector = GestureInputCollector(
        HttpWorkflowSender(args.url, timeout=args.timeout),
        on_result=render_result,
        on_haptic=render_haptic,
    )
    print("CursorGenie gesture simulator")
    print(HELP)
    print_menu(collector)

    for line in sys.stdin:
        if not handle_line(collector, line):
            break

    # a debounced request may still be running on the timer thread
    collector.wait_idle(timeout=args.timeout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
