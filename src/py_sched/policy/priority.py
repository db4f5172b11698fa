"""Priority scheduling — the highest-priority ready process runs first.

Non-preemptive: once dispatched, a process runs until it finishes.
Higher priority values are more important.  Priorities are static;
a low-priority process can starve while important work keeps
arriving.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from py_sched.logging import LogLevel
from py_sched.policy.base import IDLE, BasePolicy, Pid

if TYPE_CHECKING:
    from py_sched.logging import Logger
    from py_sched.policy.base import ProcessView


class PriorityPolicy(BasePolicy):
    """Non-preemptive static priority scheduling, FIFO among equals."""

    source = "priority"

    def __init__(self, *, processes: ProcessView, logger: Logger | None = None) -> None:
        """Create a priority policy.

        Args:
            processes: Read-only lookup of each process's priority.
            logger: Optional decision log.

        """
        self._processes = processes
        self._ready_queue: deque[Pid] = deque()
        super().__init__(logger=logger)

    @property
    def processes(self) -> ProcessView:
        """Return the process view this policy consults."""
        return self._processes

    @property
    def ready_pids(self) -> list[Pid]:
        """Return the ready pids in the order they would be dispatched."""
        order = sorted(
            enumerate(self._ready_queue),
            key=lambda item: (-self._processes.priority(item[1]), item[0]),
        )
        return [pid for _, pid in order]

    @property
    def ready_count(self) -> int:
        """Return the number of ready processes."""
        return len(self._ready_queue)

    def new_process(self, pid: Pid) -> None:
        """Add *pid* to the ready set."""
        self._ready_queue.append(pid)
        self._log(LogLevel.DEBUG, f"pid {pid} enqueued", pid=pid)

    def dispatch(self) -> Pid:
        """Remove and return the highest-priority ready pid, or IDLE.

        Raises:
            KeyError: If a ready pid is unknown to the process view.

        """
        if not self._ready_queue:
            return IDLE
        best_idx = 0
        best_priority = self._processes.priority(self._ready_queue[0])
        for i in range(1, len(self._ready_queue)):
            prio = self._processes.priority(self._ready_queue[i])
            if prio > best_priority:
                best_priority = prio
                best_idx = i
        # O(n) removal, fine for simulator-sized queues
        self._running_pid = self._ready_queue[best_idx]
        del self._ready_queue[best_idx]
        self._log(
            LogLevel.DEBUG,
            f"dispatched pid {self._running_pid} (priority={best_priority})",
            pid=self._running_pid,
        )
        return self._running_pid

    def preempt(self) -> bool:
        """Never preempt: a dispatched process runs to completion."""
        if self._running_pid == IDLE:
            return self._preempt_idle()
        return False

    def reset_policy(self) -> None:
        """Drop every ready process and go idle."""
        self._ready_queue = deque()
        super().reset_policy()
        self._log(LogLevel.INFO, "policy reset")
