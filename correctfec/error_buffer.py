"""Double buffer of accumulated path errors for the Viterbi decoder."""

from __future__ import annotations


class ErrorBuffer:
    """Two per-state error arrays, one read from and one written to."""

    def __init__(self, num_states: int) -> None:
        self.num_states = num_states
        self.errors = ([0] * num_states, [0] * num_states)
        self.index = 0
        self.read_errors = self.errors[0]
        self.write_errors = self.errors[1]

    def reset(self) -> None:
        """Zero both arrays and return to the initial pairing."""
        for errors in self.errors:
            errors[:] = [0] * self.num_states
        self.index = 0
        self.read_errors = self.errors[0]
        self.write_errors = self.errors[1]

    def swap(self) -> None:
        """Advance to the next time slice.

        Reading moves to the array at the current index and writing to the
        other one; right after a reset this leaves the pairing unchanged.
        """
        self.read_errors = self.errors[self.index]
        self.index = (self.index + 1) % 2
        self.write_errors = self.errors[self.index]