"""
Command registry.

Maps public API command names to the sibling process that owns them and the
sub-command that process understands. The table is built once at import and
never mutated; resolve() is a plain lookup over it.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class ProcessTarget(enum.Enum):
    """Sibling processes an API command can be routed to."""
    NONE = "none"  # table terminator, owns no channel
    MAIN = "main"
    GENERATOR = "generator"
    STRATIFIER = "stratifier"
    CONNECTOR = "connector"


@dataclass(frozen=True)
class CommandSpec:
    name: str
    target: ProcessTarget
    remote_command: str
    requires_params: bool = False


API_COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec("connector.stats", ProcessTarget.CONNECTOR, "stats", False),
    CommandSpec("stratifier.stats", ProcessTarget.STRATIFIER, "stats", False),
    CommandSpec("generator.stats", ProcessTarget.GENERATOR, "stats", False),
    CommandSpec("", ProcessTarget.NONE, "", False),
)


def resolve(name: str) -> Optional[CommandSpec]:
    """Return the first registered command named exactly ``name``, or None."""
    for spec in API_COMMANDS:
        if spec.target is ProcessTarget.NONE:
            break
        if spec.name == name:
            return spec
    return None


def registered_commands() -> Tuple[CommandSpec, ...]:
    """All real entries, without the terminator."""
    return tuple(spec for spec in API_COMMANDS if spec.target is not ProcessTarget.NONE)
