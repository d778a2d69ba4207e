"""Tests for the session controller's tick order and run lifecycle."""

import random

from taptitan.clock import ManualClock
from taptitan.config import Rules
from taptitan.models import HitGrade, Note, SessionPhase
from taptitan.session import SessionController

# Pushes the first generated sequence far enough out that tests place notes by hand
QUIET = dict(first_sequence_delay_ms=10**9)


def _controller(**rules) -> tuple[SessionController, ManualClock]:
    clock = ManualClock()
    controller = SessionController(clock=clock, rules=Rules(**rules), rng=random.Random(1))
    return controller, clock


def _place(controller: SessionController, *targets: float) -> None:
    for target in targets:
        controller.registry.add(Note.at(target, controller.rules.travel_time_ms))


def test_session_starts_in_loading():
    controller, _ = _controller()
    assert controller.session.phase == SessionPhase.LOADING
    assert controller.tick() == []
    assert controller.handle_input() is None
    assert len(controller.registry) == 0


def test_start_begins_playing_at_full_hp():
    controller, _ = _controller()
    session = controller.start()
    assert session.phase == SessionPhase.PLAYING
    assert session.stats.titan_hp == 10000
    assert session.stats.score == 0


def test_hit_deals_damage_and_scores():
    controller, clock = _controller(**QUIET)
    controller.start()
    _place(controller, 1000.0)

    clock.set(1045.0)
    controller.tick()
    judgment = controller.handle_input()

    stats = controller.session.stats
    assert judgment.grade == HitGrade.PERFECT
    assert stats.combo == 1
    assert stats.titan_hp == 10000 - 82
    assert stats.score == 82
    assert controller.session.last_judgment is judgment


def test_score_compounds_with_combo():
    controller, clock = _controller(**QUIET)
    controller.start()
    _place(controller, 1000.0, 2000.0)

    clock.set(1000.0)
    controller.handle_input()
    clock.set(2100.0)
    controller.handle_input()

    stats = controller.session.stats
    assert stats.combo == 2
    assert stats.score == 82 * 1 + 55 * 2


def test_expired_note_breaks_combo():
    controller, clock = _controller(**QUIET)
    controller.start()
    _place(controller, 1000.0, 2000.0)

    clock.set(1000.0)
    controller.handle_input()
    clock.set(2121.0)
    missed = controller.tick()

    stats = controller.session.stats
    assert [j.grade for j in missed] == [HitGrade.MISS]
    assert stats.combo == 0
    assert stats.missed == 1
    assert stats.score == 82
    assert controller.tracker.history == [1.0, 0.0]


def test_expiry_runs_before_late_tap():
    controller, clock = _controller(**QUIET)
    controller.start()
    _place(controller, 1000.0)

    clock.set(1200.0)
    controller.tick()
    assert controller.handle_input() is None
    assert controller.session.stats.missed == 1
    assert controller.session.stats.titan_hp == 10000


def test_stray_tap_keeps_combo():
    controller, clock = _controller(**QUIET)
    controller.start()
    _place(controller, 1000.0)

    clock.set(1000.0)
    controller.handle_input()
    clock.set(1500.0)
    assert controller.handle_input() is None
    assert controller.session.stats.combo == 1
    assert controller.tracker.history == [1.0]


def test_strict_policy_makes_stray_tap_a_miss():
    controller, clock = _controller(empty_tap_breaks_combo=True, **QUIET)
    controller.start()
    _place(controller, 1000.0, 3000.0)

    clock.set(1000.0)
    controller.handle_input()
    clock.set(1500.0)
    judgment = controller.handle_input()

    assert judgment.grade == HitGrade.MISS
    assert judgment.note is None
    assert controller.session.stats.combo == 0
    assert len(controller.registry) == 1


def test_killing_blow_ends_session():
    controller, clock = _controller(**QUIET)
    controller.start()
    controller.session.stats.titan_hp = 40
    _place(controller, 1000.0, 1600.0)

    clock.set(1000.0)
    controller.handle_input()

    assert controller.session.stats.titan_hp == 0
    assert controller.session.phase == SessionPhase.ENDED

    clock.set(1600.0)
    assert controller.handle_input() is None
    clock.set(5000.0)
    assert controller.tick() == []
    assert controller.session.stats.missed == 0


def test_tick_without_elapsed_time_changes_nothing():
    controller, clock = _controller()
    controller.start()
    clock.set(1000.0)
    controller.tick()
    notes = controller.registry.pending()
    cursor = controller.choreographer.next_sequence_time
    assert notes

    assert controller.tick() == []
    assert controller.registry.pending() == notes
    assert controller.choreographer.next_sequence_time == cursor


def test_tick_after_stall_is_idempotent():
    controller, clock = _controller()
    controller.start()
    clock.set(30000.0)
    assert controller.tick() == []

    notes = controller.registry.pending()
    cursor = controller.choreographer.next_sequence_time
    assert all(note.target_time >= 30000.0 for note in notes)
    assert cursor == 38500.0

    assert controller.tick() == []
    assert controller.registry.pending() == notes
    assert controller.choreographer.next_sequence_time == cursor
    assert controller.session.stats.missed == 0
    assert controller.tracker.history == []


def test_first_sequence_is_due_after_one_second():
    controller, clock = _controller()
    controller.start()
    clock.set(999.0)
    controller.tick()
    assert controller.choreographer.next_sequence_time == 2500.0
    clock.set(1000.0)
    controller.tick()
    assert controller.choreographer.next_sequence_time > 2500.0
    assert all(note.target_time >= 2500.0 for note in controller.registry)


def test_full_window_of_perfects_raises_difficulty():
    controller, clock = _controller(history_length=3, **QUIET)
    controller.start()
    _place(controller, 1000.0, 2000.0, 3000.0)

    for target in (1000.0, 2000.0, 3000.0):
        clock.set(target)
        controller.handle_input()

    assert controller.difficulty.level == 2
    assert controller.tracker.history == []
    assert controller.session.accuracy == 1.0


def test_restart_reinitialises_everything():
    controller, clock = _controller(history_length=3, **QUIET)
    controller.start()
    controller.session.stats.titan_hp = 40
    _place(controller, 1000.0, 2000.0, 3000.0, 4000.0)
    clock.set(1000.0)
    controller.handle_input()
    assert controller.session.phase == SessionPhase.ENDED

    clock.set(10000.0)
    session = controller.restart()

    assert session.phase == SessionPhase.PLAYING
    assert session.stats.score == 0
    assert session.stats.combo == 0
    assert session.stats.titan_hp == 10000
    assert controller.difficulty.level == 1
    assert controller.tracker.history == []
    assert len(controller.registry) == 0
    assert controller.elapsed() == 0.0
