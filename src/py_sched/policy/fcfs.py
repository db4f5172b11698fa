"""First Come, First Served — processes run in arrival order.

The simplest possible policy: a plain FIFO queue, and no preemption.
Whatever was added first is dispatched first and keeps the CPU until
the simulator reports it finished.  A long job at the front makes every
job behind it wait (the convoy effect).
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from py_sched.logging import LogLevel
from py_sched.policy.base import IDLE, BasePolicy, Pid

if TYPE_CHECKING:
    from py_sched.logging import Logger


class FCFSPolicy(BasePolicy):
    """Non-preemptive FIFO scheduling."""

    source = "fcfs"

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create an FCFS policy with an empty ready queue."""
        self._ready_queue: deque[Pid] = deque()
        super().__init__(logger=logger)

    @property
    def ready_pids(self) -> list[Pid]:
        """Return a snapshot of the ready queue, head first."""
        return list(self._ready_queue)

    @property
    def ready_count(self) -> int:
        """Return the number of processes in the ready queue."""
        return len(self._ready_queue)

    def new_process(self, pid: Pid) -> None:
        """Append *pid* to the back of the queue."""
        self._ready_queue.append(pid)
        self._log(LogLevel.DEBUG, f"pid {pid} enqueued", pid=pid)

    def dispatch(self) -> Pid:
        """Pop the front of the queue (oldest arrival), or return IDLE."""
        if not self._ready_queue:
            return IDLE
        self._running_pid = self._ready_queue.popleft()
        self._log(LogLevel.DEBUG, f"dispatched pid {self._running_pid}", pid=self._running_pid)
        return self._running_pid

    def preempt(self) -> bool:
        """Never preempt: the runner keeps the CPU until it finishes."""
        if self._running_pid == IDLE:
            return self._preempt_idle()
        return False

    def reset_policy(self) -> None:
        """Drop every queued process and go idle."""
        self._ready_queue = deque()
        super().reset_policy()
        self._log(LogLevel.INFO, "policy reset")
