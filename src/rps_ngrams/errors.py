class RPSError(Exception):
    """Base class for errors raised by the game."""


class InputError(RPSError):
    """The interactive player could not obtain a move from its input source."""


class InvariantViolation(RPSError):
    """Internal logic failure that should be unreachable."""
