"""Ring buffer of survivor-path decisions for the Viterbi decoder."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

from correctfec.bits import BitWriter
from correctfec.metric import DISTANCE_MAX


class HistoryBuffer:
    """Stores one decision bit per state and time slice and emits decoded bits.

    Decoded bits are produced in bursts of ``traceback_group_length`` once
    ``min_traceback_length + traceback_group_length`` slices are stored; the
    newest ``min_traceback_length`` slices are only used to settle the path.
    """

    def __init__(
        self,
        min_traceback_length: int,
        traceback_group_length: int,
        renormalize_interval: int,
        num_states: int,
        highbit: int,
    ) -> None:
        if min_traceback_length < 0 or traceback_group_length < 0:
            raise ValueError("traceback lengths must not be negative")
        if min_traceback_length + traceback_group_length == 0:
            raise ValueError("history buffer needs room for at least one slice")
        if num_states < 1:
            raise ValueError("history buffer needs at least one state")
        self.min_traceback_length = min_traceback_length
        self.traceback_group_length = traceback_group_length
        self.cap = min_traceback_length + traceback_group_length
        self.num_states = num_states
        self.highbit = highbit
        self.history = [bytearray(num_states) for _ in range(self.cap)]
        self.index = 0
        self.length = 0
        self.renormalize_interval = renormalize_interval
        self.renormalize_counter = 0

    def reset(self) -> None:
        """Forget all stored slices."""
        self.length = 0
        self.index = 0

    def get_slice(self) -> bytearray:
        """Return the slice that the next time step writes its decisions into."""
        return self.history[self.index]

    def search(self, distances: Sequence[int], search_every: int) -> int:
        """Return the state with the least error, looking at every ``search_every``-th state."""
        bestpath = 0
        least_error = DISTANCE_MAX
        for state in range(0, self.num_states, search_every):
            if distances[state] < least_error:
                least_error = distances[state]
                bestpath = state
        return bestpath

    def renormalize(self, distances: MutableSequence[int], min_register: int) -> None:
        """Subtract the error of ``min_register`` from every state, in 16-bit arithmetic."""
        min_distance = distances[min_register]
        for state in range(self.num_states):
            distances[state] = (distances[state] - min_distance) & DISTANCE_MAX

    def traceback(self, bestpath: int, min_traceback_length: int, output: BitWriter) -> None:
        """Walk back from ``bestpath`` and write the bits older than ``min_traceback_length``."""
        index = self.index
        fetched = []
        for step in range(self.length):
            index = (index - 1) % self.cap
            pathbit = self.highbit if self.history[index][bestpath] else 0
            bestpath = (bestpath | pathbit) >> 1
            if step >= min_traceback_length:
                fetched.append(1 if pathbit else 0)
        output.write_bitlist_reversed(fetched)
        self.length -= len(fetched)

    def process_skip(
        self, distances: MutableSequence[int], output: BitWriter, skip: int
    ) -> None:
        """Commit the current slice, renormalizing and tracing back when due."""
        self.index += 1
        if self.index == self.cap:
            self.index = 0
        self.renormalize_counter += 1
        self.length += 1

        if self.renormalize_counter == self.renormalize_interval:
            self.renormalize_counter = 0
            bestpath = self.search(distances, skip)
            self.renormalize(distances, bestpath)
            if self.length == self.cap:
                self.traceback(bestpath, self.min_traceback_length, output)
        elif self.length == self.cap:
            bestpath = self.search(distances, skip)
            self.traceback(bestpath, self.min_traceback_length, output)

    def process(self, distances: MutableSequence[int], output: BitWriter) -> None:
        """Commit the current slice, considering every state."""
        self.process_skip(distances, output, 1)

    def flush(self, output: BitWriter) -> None:
        """Write every remaining bit, tracing back from state 0."""
        self.traceback(0, 0, output)