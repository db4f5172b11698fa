"""Policy configuration — which policy a simulation run should build.

A simulation picks its scheduling policy once, before the run starts.
The choice is a policy name plus whatever parameters that policy needs
(today only Round Robin's ``quantum``).  It can be written in code::

    PolicyConfig(name="rr", quantum=4)

or loaded from a small JSON document::

    {"policy": "rr", "quantum": 4}

Turning a config into a live policy is the registry's job; this module
only parses and validates the shape of the data.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_POLICY = "fcfs"


class ConfigError(RuntimeError):
    """Raise when a configuration cannot be turned into a policy.

    Examples: unreadable config file, unknown policy name, Round Robin
    without a quantum.
    """


@dataclass(frozen=True)
class PolicyConfig:
    """The policy choice for one simulation run.

    Attributes:
        name: Registry name of the policy ("fcfs", "rr", "sjf", "priority").
        quantum: Cycles per time slice (Round Robin only).

    """

    name: str = DEFAULT_POLICY
    quantum: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PolicyConfig:
        """Build a config from a decoded JSON object.

        Raises:
            ConfigError: If the fields have the wrong types.

        """
        name = data.get("policy", DEFAULT_POLICY)
        if not isinstance(name, str):
            msg = f"Policy name must be a string, got {name!r}"
            raise ConfigError(msg)
        quantum = data.get("quantum")
        if quantum is not None and (isinstance(quantum, bool) or not isinstance(quantum, int)):
            msg = f"Invalid quantum '{quantum}'"
            raise ConfigError(msg)
        return cls(name=name.lower(), quantum=quantum)


def load_config(path: Path) -> PolicyConfig:
    """Load a policy configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load policy config: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = "Policy config must be a JSON object"
        raise ConfigError(msg)
    return PolicyConfig.from_dict(data)
