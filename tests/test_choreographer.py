"""Tests for procedural sequence generation."""

import random

import pytest

from taptitan.choreographer import Choreographer, generate_sequence
from taptitan.models import DifficultyState
from taptitan.registry import NoteRegistry


class FixedRandom(random.Random):
    """Every Bernoulli draw returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def test_level_one_always_hit_sequence():
    targets, next_start = generate_sequence(2500.0, DifficultyState(level=1), FixedRandom(0.0))
    assert targets == [pytest.approx(2500.0 + i * 600.0) for i in range(8)]
    # Eight beats plus a rest measure
    assert next_start == pytest.approx(2500.0 + 12 * 600.0)


def test_level_ten_fills_every_slot():
    difficulty = DifficultyState(level=10)
    beat = difficulty.beat_interval
    targets, _ = generate_sequence(0.0, difficulty, FixedRandom(0.0))
    assert len(targets) == 24
    expected = sorted(i * beat + off for i in range(8) for off in (0.0, beat / 4, beat / 2))
    assert targets == [pytest.approx(t) for t in expected]


def test_unlucky_draws_give_an_empty_sequence():
    difficulty = DifficultyState(level=10)
    targets, next_start = generate_sequence(1000.0, difficulty, FixedRandom(0.999))
    assert targets == []
    assert next_start == pytest.approx(1000.0 + 12 * difficulty.beat_interval)


def test_slots_land_on_the_beat_grid():
    difficulty = DifficultyState(level=9)
    beat = difficulty.beat_interval
    for seed in range(20):
        targets, _ = generate_sequence(0.0, difficulty, random.Random(seed))
        for target in targets:
            offset = target % beat
            assert min(abs(offset - o) for o in (0.0, beat / 4, beat / 2, beat)) < 1e-6
            assert target < 8 * beat


def test_seeded_generation_is_reproducible():
    a = generate_sequence(0.0, DifficultyState(level=6), random.Random(42))
    b = generate_sequence(0.0, DifficultyState(level=6), random.Random(42))
    assert a == b


def test_generation_fires_once_per_due_time():
    registry = NoteRegistry()
    choreographer = Choreographer(travel_time=1500.0, rng=FixedRandom(0.0))
    choreographer.reset(2500.0)

    assert choreographer.maybe_generate(999.0, registry) == []
    notes = choreographer.maybe_generate(1000.0, registry)
    assert len(notes) == 8
    assert len(registry) == 8
    assert choreographer.maybe_generate(1000.0, registry) == []
    assert len(registry) == 8
    assert choreographer.next_sequence_time == pytest.approx(9700.0)


def test_generated_notes_spawn_before_target():
    registry = NoteRegistry()
    choreographer = Choreographer(travel_time=1500.0, rng=random.Random(7), difficulty=DifficultyState(level=10))
    choreographer.reset(2500.0)
    choreographer.maybe_generate(1000.0, registry)
    for note in registry:
        assert note.spawn_time == pytest.approx(note.target_time - 1500.0)
        assert note.spawn_time < note.target_time


def test_reset_returns_to_level_one():
    choreographer = Choreographer(travel_time=1500.0, difficulty=DifficultyState(level=6))
    choreographer.reset(2500.0)
    assert choreographer.difficulty.level == 1
    assert choreographer.next_sequence_time == 2500.0


def test_stalled_host_skips_sequences_that_already_started():
    registry = NoteRegistry()
    choreographer = Choreographer(travel_time=1500.0, rng=FixedRandom(0.0))
    choreographer.reset(2500.0)

    notes = choreographer.maybe_generate(30000.0, registry)

    # 2500, 9700, 16900 and 24100 are in the past; 31300 is the next one due
    assert [n.target_time for n in notes] == [pytest.approx(31300.0 + i * 600.0) for i in range(8)]
    assert choreographer.next_sequence_time == pytest.approx(38500.0)
    assert not choreographer.is_due(30000.0)
    assert choreographer.maybe_generate(30000.0, registry) == []
