"""
Error taxonomy for the amplitude engine.

Every condition below is unrecoverable at the point of detection: the
engine raises immediately and leaves the skip-or-abort decision to the
caller driving event generation.
"""


class ScatteringError(Exception):
    """Base class for all amplitude-engine failures."""


class ClassificationError(ScatteringError, ValueError):
    """Process is neither neutral current nor charged current."""


class UnsupportedMediatorError(ScatteringError, KeyError):
    """Mediator identity outside the supported set (W+, W-, Z, photon)."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class UninitializedProcessError(ScatteringError, RuntimeError):
    """Amplitude requested before the process was resolved."""


class NumericalSingularity(ScatteringError, ArithmeticError):
    """Propagator pole hit exactly, or a non-finite / negative cross section."""
