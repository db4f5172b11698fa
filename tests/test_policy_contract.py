"""Contract tests shared by every scheduling policy.

Every policy must be usable interchangeably by a simulator, so the
same checks run against each of them.  A tiny driver loop plays the
simulator's role: it feeds arrivals, dispatches when the CPU is idle,
calls preempt() once per running cycle, and decides on its own when a
process has finished.
"""

from collections.abc import Callable

import pytest

from py_sched.policy import (
    IDLE,
    FCFSPolicy,
    PriorityPolicy,
    ProcessInfo,
    ProcessTableView,
    RRPolicy,
    SchedulingPolicy,
    SJFPolicy,
)

QUANTUM = 2

# pid → service time; every pid has the same priority so only
# the policy's own ordering rule matters.
WORKLOAD = {1: 5, 2: 3, 3: 1, 4: 4}

_VIEW = ProcessTableView(ProcessInfo(pid=pid, service_time=t) for pid, t in WORKLOAD.items())

PolicyFactory = Callable[[], SchedulingPolicy]

FACTORIES: dict[str, PolicyFactory] = {
    "fcfs": FCFSPolicy,
    "rr": lambda: RRPolicy(quantum=QUANTUM),
    "sjf": lambda: SJFPolicy(processes=_VIEW),
    "priority": lambda: PriorityPolicy(processes=_VIEW),
}


def _run(policy: SchedulingPolicy, workload: dict[int, int]) -> tuple[list[int], list[int]]:
    """Drive *policy* until every process in *workload* has finished.

    Returns:
        ``(dispatches, completions)`` — pids in the order they were
        dispatched (with repeats) and in the order they finished.

    """
    for pid in workload:
        policy.new_process(pid)
    remaining = dict(workload)
    dispatches: list[int] = []
    completions: list[int] = []
    running = IDLE
    max_cycles = sum(workload.values()) * 4
    for _ in range(max_cycles):
        if running != IDLE:
            if remaining[running] == 0:
                completions.append(running)
                running = IDLE
            elif policy.preempt():
                running = IDLE
            else:
                remaining[running] -= 1
                continue
        running = policy.dispatch()
        if running == IDLE:
            break
        dispatches.append(running)
        remaining[running] -= 1
    return dispatches, completions


@pytest.fixture(params=sorted(FACTORIES))
def policy(request: pytest.FixtureRequest) -> SchedulingPolicy:
    """Provide a fresh instance of each policy in turn."""
    return FACTORIES[request.param]()


class TestContract:
    """Behaviour every policy must share."""

    def test_new_policy_is_idle(self, policy: SchedulingPolicy) -> None:
        """No runner and nothing ready before the first arrival."""
        assert policy.running_pid == IDLE
        assert policy.ready_count == 0

    def test_dispatch_on_empty_returns_idle(self, policy: SchedulingPolicy) -> None:
        """An empty ready set is not an error."""
        assert policy.dispatch() == IDLE
        assert policy.dispatch() == IDLE
        assert policy.running_pid == IDLE

    def test_preempt_while_idle_returns_false(self, policy: SchedulingPolicy) -> None:
        """preempt() with no runner is a no-op."""
        policy.new_process(1)
        assert policy.preempt() is False
        assert policy.ready_pids == [1]

    def test_dispatch_moves_pid_from_ready_to_running(self, policy: SchedulingPolicy) -> None:
        """A pid is either ready or running, never both."""
        policy.new_process(1)
        pid = policy.dispatch()
        assert pid == 1
        assert policy.running_pid == 1
        assert 1 not in policy.ready_pids

    def test_every_pid_is_dispatched_and_finishes(self, policy: SchedulingPolicy) -> None:
        """No process is lost between arrival and completion."""
        dispatches, completions = _run(policy, WORKLOAD)
        assert set(dispatches) == set(WORKLOAD)
        assert sorted(completions) == sorted(WORKLOAD)
        assert policy.ready_count == 0

    def test_reset_discards_everything(self, policy: SchedulingPolicy) -> None:
        """After a reset no earlier pid can be dispatched."""
        for pid in WORKLOAD:
            policy.new_process(pid)
        policy.dispatch()
        policy.reset_policy()
        assert policy.running_pid == IDLE
        assert policy.ready_count == 0
        assert policy.dispatch() == IDLE

    def test_ready_and_running_never_overlap(self, policy: SchedulingPolicy) -> None:
        """Through a whole run, no pid is duplicated across queue and CPU."""
        for pid in WORKLOAD:
            policy.new_process(pid)
        running = policy.dispatch()
        for _ in range(20):
            ready = policy.ready_pids
            assert len(ready) == len(set(ready))
            assert policy.running_pid not in ready
            assert len(ready) + (policy.running_pid != IDLE) == len(WORKLOAD)
            if policy.preempt() or running == IDLE:
                running = policy.dispatch()


class TestOrdering:
    """Each policy's distinguishing dispatch order on the same workload."""

    def test_fcfs_runs_to_completion_in_arrival_order(self) -> None:
        """FCFS never interleaves."""
        dispatches, completions = _run(FCFSPolicy(), WORKLOAD)
        assert dispatches == [1, 2, 3, 4]
        assert completions == [1, 2, 3, 4]

    def test_rr_interleaves_in_arrival_order(self) -> None:
        """RR cycles through the queue one quantum at a time."""
        dispatches, completions = _run(RRPolicy(quantum=QUANTUM), WORKLOAD)
        assert dispatches == [1, 2, 3, 4, 1, 2, 4, 1]
        assert completions == [3, 2, 4, 1]

    def test_sjf_runs_shortest_first(self) -> None:
        """SJF orders by service time."""
        dispatches, completions = _run(SJFPolicy(processes=_VIEW), WORKLOAD)
        assert dispatches == [3, 2, 4, 1]
        assert completions == dispatches

    def test_rr_single_quantum_exceeds_every_job(self) -> None:
        """With a quantum larger than every job, RR behaves like FCFS."""
        dispatches, completions = _run(RRPolicy(quantum=10), WORKLOAD)
        assert dispatches == [1, 2, 3, 4]
        assert completions == [1, 2, 3, 4]
