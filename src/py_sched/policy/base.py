"""The scheduling policy contract and the state every policy shares.

A simulator owns the clock and the process table.  It hands the policy
four kinds of news and asks it two kinds of questions:

- ``new_process(pid)`` — a process became ready.
- ``dispatch()`` — the CPU is idle; who runs next?
- ``preempt()`` — one more cycle went by; must the runner yield now?
- ``reset_policy()`` — a new simulation run is about to start.

The policy never calls back into the simulator.  It is a small state
machine driven entirely by those calls, one at a time.

Design: Strategy pattern
    The simulator is the *context*; SchedulingPolicy is the *strategy*.
    The simulator holds "a policy" and never needs to know which one.

Policies that need facts about a process (its service time or
priority) receive a read-only ``ProcessView`` when they are built,
instead of a reference back to the simulator.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, Protocol

from py_sched.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterable

Pid = int

IDLE: Final[Pid] = -1
"""Sentinel pid meaning "no process is on the CPU"."""


class SchedulingPolicy(Protocol):
    """Interface that every scheduling algorithm must satisfy."""

    @property
    def running_pid(self) -> Pid:
        """Return the pid on the CPU, or IDLE."""
        ...  # pragma: no cover

    @property
    def ready_pids(self) -> list[Pid]:
        """Return a snapshot of the ready processes, next-to-run first."""
        ...  # pragma: no cover

    @property
    def ready_count(self) -> int:
        """Return the number of ready processes."""
        ...  # pragma: no cover

    def new_process(self, pid: Pid) -> None:
        """Register a newly arrived (or newly ready) process."""
        ...  # pragma: no cover

    def dispatch(self) -> Pid:
        """Pick the next process to run, or return IDLE if none is ready."""
        ...  # pragma: no cover

    def preempt(self) -> bool:
        """Account for one cycle; return True if the runner must yield now."""
        ...  # pragma: no cover

    def reset_policy(self) -> None:
        """Return to the initial empty, idle state."""
        ...  # pragma: no cover


class BasePolicy:
    """Shared state for concrete policies: runner, quantum, quantum clock.

    Subclasses own their ready queue and implement the four contract
    operations.  Calling ``reset_policy()`` from ``__init__`` means a
    freshly built policy is already idle and empty, so subclasses must
    create whatever ``reset_policy()`` touches before calling
    ``super().__init__``.
    """

    source: str = "policy"

    def __init__(self, *, quantum: int | None = None, logger: Logger | None = None) -> None:
        """Create the shared policy state.

        Args:
            quantum: Cycles per time slice, or None for policies that
                never preempt on a timer.
            logger: Optional decision log.

        Raises:
            ValueError: If *quantum* is given but is not a positive int.

        """
        if quantum is not None and (
            isinstance(quantum, bool) or not isinstance(quantum, int) or quantum < 1
        ):
            msg = f"quantum must be a positive integer, got {quantum!r}"
            raise ValueError(msg)
        self._quantum = quantum
        self._logger = logger
        self._running_pid: Pid = IDLE
        self._quantum_clock: int = 0
        self.reset_policy()

    @property
    def quantum(self) -> int | None:
        """Return the time slice length in cycles, or None."""
        return self._quantum

    @property
    def quantum_clock(self) -> int:
        """Return the cycles left in the running process's slice."""
        return self._quantum_clock

    @property
    def running_pid(self) -> Pid:
        """Return the pid on the CPU, or IDLE."""
        return self._running_pid

    @property
    def logger(self) -> Logger | None:
        """Return the decision log, if one was attached."""
        return self._logger

    def reset_policy(self) -> None:
        """Clear the runner and re-arm the quantum clock."""
        self._running_pid = IDLE
        self._quantum_clock = self._quantum or 0

    def _log(self, level: LogLevel, message: str, *, pid: Pid = IDLE) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=self.source, pid=pid)

    def _preempt_idle(self) -> bool:
        """Handle ``preempt()`` with nothing running: a logged no-op."""
        self._log(LogLevel.WARNING, "preempt called with no running process")
        return False


# -- Read-only process context -----------------------------------------------


@dataclass(frozen=True)
class ProcessInfo:
    """The facts about a process that ordering policies may consult.

    Attributes:
        pid: The process identifier.
        service_time: Total CPU cycles the process needs.
        priority: Scheduling priority (higher = more important).

    """

    pid: Pid
    service_time: int
    priority: int = 0


class ProcessView(Protocol):
    """Read-only lookup of per-process facts, supplied by the simulator."""

    def service_time(self, pid: Pid) -> int:
        """Return the total CPU cycles *pid* needs."""
        ...  # pragma: no cover

    def priority(self, pid: Pid) -> int:
        """Return the scheduling priority of *pid*."""
        ...  # pragma: no cover


class ProcessTableView:
    """A ``ProcessView`` backed by a fixed set of ``ProcessInfo`` records.

    The records are copied into a read-only mapping at construction, so
    the policy can look but never touch.
    """

    def __init__(self, infos: Iterable[ProcessInfo]) -> None:
        """Index *infos* by pid.

        Raises:
            ValueError: If two records share a pid.

        """
        table: dict[Pid, ProcessInfo] = {}
        for info in infos:
            if info.pid in table:
                msg = f"Duplicate process record for pid {info.pid}"
                raise ValueError(msg)
            table[info.pid] = info
        self._table = MappingProxyType(table)

    def __len__(self) -> int:
        """Return the number of known processes."""
        return len(self._table)

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* has a record."""
        return pid in self._table

    def info(self, pid: Pid) -> ProcessInfo:
        """Return the record for *pid*.

        Raises:
            KeyError: If *pid* is unknown.

        """
        return self._table[pid]

    def service_time(self, pid: Pid) -> int:
        """Return the total CPU cycles *pid* needs."""
        return self._table[pid].service_time

    def priority(self, pid: Pid) -> int:
        """Return the scheduling priority of *pid*."""
        return self._table[pid].priority
