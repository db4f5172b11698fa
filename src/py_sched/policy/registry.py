"""Build a policy from its configured name.

The simulator decides which policy to use at configuration time and
from then on only talks to the ``SchedulingPolicy`` interface.  Each
call to ``create_policy`` returns a fresh, independently owned
instance, so two simulation runs never share scheduling state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_sched.config import ConfigError
from py_sched.policy.fcfs import FCFSPolicy
from py_sched.policy.priority import PriorityPolicy
from py_sched.policy.rr import RRPolicy
from py_sched.policy.sjf import SJFPolicy

if TYPE_CHECKING:
    from py_sched.config import PolicyConfig
    from py_sched.logging import Logger
    from py_sched.policy.base import ProcessView, SchedulingPolicy

POLICY_NAMES: tuple[str, ...] = ("fcfs", "rr", "sjf", "priority")


def create_policy(
    config: PolicyConfig,
    *,
    processes: ProcessView | None = None,
    logger: Logger | None = None,
) -> SchedulingPolicy:
    """Create the policy named by *config*.

    Args:
        config: The policy name and parameters.
        processes: Read-only process facts, needed by sjf and priority.
        logger: Optional decision log handed to the policy.

    Returns:
        A new policy in its initial idle, empty state.

    Raises:
        ConfigError: If the name is unknown or a required parameter
            is missing or invalid.

    """
    match config.name:
        case "fcfs":
            return FCFSPolicy(logger=logger)
        case "rr":
            if config.quantum is None:
                msg = "Round Robin requires a quantum"
                raise ConfigError(msg)
            try:
                return RRPolicy(quantum=config.quantum, logger=logger)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        case "sjf":
            if processes is None:
                msg = "SJF requires a process view"
                raise ConfigError(msg)
            return SJFPolicy(processes=processes, logger=logger)
        case "priority":
            if processes is None:
                msg = "Priority requires a process view"
                raise ConfigError(msg)
            return PriorityPolicy(processes=processes, logger=logger)
        case _:
            msg = (
                f"Unknown scheduling policy '{config.name}'."
                f" Use {', '.join(POLICY_NAMES)}."
            )
            raise ConfigError(msg)


def describe_policy(policy: SchedulingPolicy) -> str:
    """Return a human-readable label for *policy*."""
    match policy:
        case FCFSPolicy():
            return "FCFS"
        case RRPolicy():
            return f"Round Robin (quantum={policy.quantum})"
        case SJFPolicy():
            return "SJF"
        case PriorityPolicy():
            return "Priority"
        case _:
            return type(policy).__name__
