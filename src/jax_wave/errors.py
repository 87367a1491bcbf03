"""Exception types raised by the solver."""


class WaveSolverError(Exception):
    """Base class for all solver errors."""


class ConfigurationError(WaveSolverError, ValueError):
    """Invalid grid, time-step or run parameters."""


class NotInitializedError(WaveSolverError, RuntimeError):
    """A simulation was stepped or queried before `initialize` was called."""


class ImplementationError(WaveSolverError, RuntimeError):
    """
    Internal contract violation.

    Raised when a right-hand side returns a state whose structure, shape or
    dtype differs from the state it was given. Not recoverable by the caller.
    """
