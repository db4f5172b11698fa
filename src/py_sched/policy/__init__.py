"""Scheduling policies — who runs next, and when the runner must yield.

Re-exports public symbols so callers can write::

    from py_sched.policy import IDLE, RRPolicy, create_policy
"""

from py_sched.policy.base import (
    IDLE,
    BasePolicy,
    Pid,
    ProcessInfo,
    ProcessTableView,
    ProcessView,
    SchedulingPolicy,
)
from py_sched.policy.fcfs import FCFSPolicy
from py_sched.policy.priority import PriorityPolicy
from py_sched.policy.registry import POLICY_NAMES, create_policy, describe_policy
from py_sched.policy.rr import RRPolicy
from py_sched.policy.sjf import SJFPolicy

__all__ = [
    "IDLE",
    "POLICY_NAMES",
    "BasePolicy",
    "FCFSPolicy",
    "Pid",
    "PriorityPolicy",
    "ProcessInfo",
    "ProcessTableView",
    "ProcessView",
    "RRPolicy",
    "SJFPolicy",
    "SchedulingPolicy",
    "create_policy",
    "describe_policy",
]
