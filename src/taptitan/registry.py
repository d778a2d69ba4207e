"""Note registry: the ordered set of scheduled, still-pending notes."""

from __future__ import annotations

from collections.abc import Iterator

from taptitan.models import HitGrade, Note, NoteState


class NoteRegistry:
    """Owns every pending note, kept in schedule order.

    Notes leave the registry exactly once, through :meth:`resolve`, which is
    how they transition out of PENDING.
    """

    def __init__(self) -> None:
        self._notes: list[Note] = []

    def add(self, note: Note) -> None:
        if not note.pending:
            raise ValueError("only pending notes can be scheduled")
        # Keep target-time order; sequences append in order so this is usually O(1)
        idx = len(self._notes)
        while idx > 0 and self._notes[idx - 1].target_time > note.target_time:
            idx -= 1
        self._notes.insert(idx, note)

    def extend(self, notes: list[Note]) -> None:
        for note in notes:
            self.add(note)

    def resolve(self, note: Note, state: NoteState, grade: HitGrade) -> None:
        """Move a pending note to a terminal state and drop it from the registry."""
        if state is NoteState.PENDING:
            raise ValueError("resolve needs a terminal state")
        self._notes.remove(note)
        note.state = state
        note.grade = grade

    def pending(self) -> list[Note]:
        return list(self._notes)

    def clear(self) -> None:
        self._notes.clear()

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(list(self._notes))
