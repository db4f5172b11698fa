"""Shortest Job First — the ready process needing the least CPU runs next.

Also known as Shortest Process Next.  Non-preemptive: once dispatched,
a process keeps the CPU until it finishes.  Average waiting time is
minimal among non-preemptive policies, but a stream of short jobs can
keep a long job waiting indefinitely.

The policy cannot know how long a job is from its pid alone, so it is
built with a read-only ``ProcessView`` that answers ``service_time``.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from py_sched.logging import LogLevel
from py_sched.policy.base import IDLE, BasePolicy, Pid

if TYPE_CHECKING:
    from py_sched.logging import Logger
    from py_sched.policy.base import ProcessView


class SJFPolicy(BasePolicy):
    """Non-preemptive shortest-job-first scheduling.

    Tiebreaker: equal service times dispatch in arrival order, since we
    scan left-to-right and only replace the best on a strictly shorter
    job.
    """

    source = "sjf"

    def __init__(self, *, processes: ProcessView, logger: Logger | None = None) -> None:
        """Create an SJF policy.

        Args:
            processes: Read-only lookup of each process's service time.
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
            key=lambda item: (self._processes.service_time(item[1]), item[0]),
        )
        return [pid for _, pid in order]

    @property
    def ready_count(self) -> int:
        """Return the number of ready processes."""
        return len(self._ready_queue)

    def new_process(self, pid: Pid) -> None:
        """Add *pid* to the ready set (arrival order is kept for ties)."""
        self._ready_queue.append(pid)
        self._log(LogLevel.DEBUG, f"pid {pid} enqueued", pid=pid)

    def dispatch(self) -> Pid:
        """Remove and return the ready pid with the shortest service time.

        Raises:
            KeyError: If a ready pid is unknown to the process view.

        """
        if not self._ready_queue:
            return IDLE
        best_idx = 0
        best_time = self._processes.service_time(self._ready_queue[0])
        for i in range(1, len(self._ready_queue)):
            time = self._processes.service_time(self._ready_queue[i])
            if time < best_time:
                best_time = time
                best_idx = i
        self._running_pid = self._ready_queue[best_idx]
        del self._ready_queue[best_idx]
        self._log(
            LogLevel.DEBUG,
            f"dispatched pid {self._running_pid} (service_time={best_time})",
            pid=self._running_pid,
        )
        return self._running_pid

    def preempt(self) -> bool:
        """Never preempt: SJF is non-preemptive."""
        if self._running_pid == IDLE:
            return self._preempt_idle()
        return False

    def reset_policy(self) -> None:
        """Drop every ready process and go idle."""
        self._ready_queue = deque()
        super().reset_policy()
        self._log(LogLevel.INFO, "policy reset")
