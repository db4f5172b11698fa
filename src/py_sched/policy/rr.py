"""Round Robin — FIFO order with a fixed time quantum.

Each dispatched process gets ``quantum`` cycles of CPU.  When the slice
runs out and the process has not finished, it goes to the *back* of the
ready queue and the next process in line gets the CPU.  Nobody waits
longer than ``(n - 1) * quantum`` cycles for a turn, where ``n`` is the
number of ready processes.

Cycle accounting::

    dispatch()   → runs cycle 1 of the slice   (clock = quantum - 1)
    preempt()    → runs cycle 2                (clock = quantum - 2)
    ...
    preempt()    → runs cycle quantum          (clock = 0)
    preempt()    → slice exhausted: requeue at the tail, return True

So a process that keeps running sees ``quantum - 1`` preempt() calls
return False before the one that returns True.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from py_sched.logging import LogLevel
from py_sched.policy.base import IDLE, BasePolicy, Pid

if TYPE_CHECKING:
    from py_sched.logging import Logger


class RRPolicy(BasePolicy):
    """Round Robin scheduling over a FIFO ready queue.

    Ordering is by arrival only.  A preempted process re-enters at the
    tail, behind everything that was already waiting.
    """

    source = "rr"

    def __init__(self, *, quantum: int, logger: Logger | None = None) -> None:
        """Create a Round Robin policy with the given time quantum.

        Args:
            quantum: Number of cycles before forced preemption.
            logger: Optional decision log.

        Raises:
            ValueError: If *quantum* is not a positive integer.

        """
        if quantum is None:
            msg = "Round Robin requires a quantum"
            raise ValueError(msg)
        self._ready_queue: deque[Pid] = deque()
        super().__init__(quantum=quantum, logger=logger)

    @property
    def quantum(self) -> int:
        """Return the time quantum (cycles per slice)."""
        assert self._quantum is not None  # noqa: S101
        return self._quantum

    @property
    def ready_pids(self) -> list[Pid]:
        """Return a snapshot of the ready queue, head first."""
        return list(self._ready_queue)

    @property
    def ready_count(self) -> int:
        """Return the number of processes in the ready queue."""
        return len(self._ready_queue)

    def new_process(self, pid: Pid) -> None:
        """Append *pid* to the tail of the ready queue."""
        self._ready_queue.append(pid)
        self._log(LogLevel.DEBUG, f"pid {pid} enqueued", pid=pid)

    def dispatch(self) -> Pid:
        """Pop the head of the ready queue and start its time slice.

        The dispatch itself counts as the first cycle of the slice, so
        the quantum clock is armed and immediately decremented.

        Returns:
            The dispatched pid, or IDLE if nothing is ready.

        """
        if not self._ready_queue:
            return IDLE
        self._running_pid = self._ready_queue.popleft()
        self._quantum_clock = self.quantum
        self._quantum_clock -= 1
        self._log(
            LogLevel.DEBUG,
            f"dispatched pid {self._running_pid} (quantum={self.quantum})",
            pid=self._running_pid,
        )
        return self._running_pid

    def preempt(self) -> bool:
        """Spend one cycle of the running slice, or end it.

        Returns:
            True if the slice was exhausted: the runner has already been
            put back at the tail and the CPU is idle.  False otherwise.

        """
        if self._running_pid == IDLE:
            return self._preempt_idle()
        if self._quantum_clock == 0:
            pid = self._running_pid
            self._ready_queue.append(pid)
            self._running_pid = IDLE
            self._log(LogLevel.DEBUG, f"quantum expired for pid {pid}", pid=pid)
            return True
        self._quantum_clock -= 1
        return False

    def reset_policy(self) -> None:
        """Drop every queued process, go idle, and re-arm the clock."""
        self._ready_queue = deque()
        super().reset_policy()
        self._log(LogLevel.INFO, "policy reset")
