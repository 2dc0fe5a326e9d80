"""
Gauss Engine - linear equation solver for small, degenerate systems
===================================================================

Handles duplicate and parallel equations, contradictions, more unknowns
than equations and mostly-zero coefficient rows.

Quick start:
    import gauss

    # Inspect a system
    report = gauss.detect_system(A, b)

    # Solve it (one representative solution if there are many)
    x = gauss.solve(A, b)

    # Verify
    assert gauss.residual(A, b, x) < 1e-6

License: MIT
"""

__version__ = "0.1.0"

from gauss.system import ZERO_EDGE, NoSolutionError, EquationSystem, ResultVector
from gauss.detector import detect_system
from gauss.solver import solve, residual

__all__ = [
    "solve", "residual", "detect_system",
    "NoSolutionError", "EquationSystem", "ResultVector", "ZERO_EDGE",
]
