"""
Gauss Detector: structure report for a linear system.

Analyzes a system and returns a report with:
  - Shape, density, zero columns
  - Redundant equations that would be dropped
  - The route the solver will take (all-zero / single / 2x2 / elimination)

The report is computed on a copy; the caller's data is never modified.

Usage:
    import gauss
    report = gauss.detect_system(A, b)
    print(report["strategy"], report["reason"])
"""

import numpy as np

from gauss.system import (
    ZERO_EDGE, EquationSystem, ResultVector, normalize_underdetermined,
)
from gauss.screens import remove_redundant


def detect_system(matrix, constants, tol=ZERO_EDGE):
    """
    Analyze system structure and predict the solving strategy.

    Parameters
    ----------
    matrix : array-like or scipy.sparse matrix, shape (M, N)
        Coefficient matrix.
    constants : array-like, shape (M,)
        Right-hand side vector.
    tol : float
        Zero / equality tolerance.

    Returns
    -------
    dict
        Structure report with shape, density, nnz, strategy.
    """
    system = EquationSystem.build(matrix, constants, tol=tol)
    m, n = system.num_equations, system.num_unknowns
    coeffs = system.rows[:, :-1]
    nnz = int(np.count_nonzero(np.abs(coeffs) >= tol))
    total = m * n
    density = nnz / total if total > 0 else 0

    work = system.copy()
    duplicates = 0 if system.is_all_zero() else remove_redundant(work)
    normalize_underdetermined(work, ResultVector(n))
    remaining = work.num_equations

    if system.is_all_zero():
        strategy = "all_zero"
        reason = "Every coefficient and constant is zero"
    elif remaining == 1:
        strategy = "single_equation"
        reason = "One independent equation, free unknowns set to 0"
    elif (remaining == 2
          and work.count_nonzero(0) == 2 and work.count_nonzero(1) == 2
          and work.nonzero_indexes(0) == work.nonzero_indexes(1)):
        strategy = "two_by_two"
        reason = "Two equations over the same two unknowns, closed form"
    else:
        strategy = "elimination"
        reason = f"{remaining} x {n} system, iterative elimination"

    return {
        "shape": (m, n),
        "nnz": nnz,
        "density": round(density, 6),
        "is_square": m == n,
        "is_underdetermined": remaining < n,
        "zero_columns": system.zero_columns(),
        "duplicate_rows": duplicates,
        "strategy": strategy,
        "reason": reason,
    }
