"""
Exception hierarchy.

Two tiers of failure exist in the game:

- User-input errors (``CommandError``) are recoverable. They never escape
  the command dispatcher; they are turned into a single event line.
- Engine invariant violations (``EngineInvariantError``) mean the game is
  misconfigured and cannot continue. They propagate to the caller.
"""


class ElevatorDispatchError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(ElevatorDispatchError, ValueError):
    """Invalid game configuration."""


class CommandError(ElevatorDispatchError):
    """
    A player command was malformed or out of range.

    The message is the human-readable text that ends up in the event log.
    """


class EngineInvariantError(ElevatorDispatchError, RuntimeError):
    """Internal state that should be impossible under a valid configuration."""


class PassengerPoolError(EngineInvariantError):
    """The weighted passenger draw selected no pool entry."""
