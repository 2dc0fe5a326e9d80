"""
Gauss Solver: linear system solver for small, possibly degenerate systems.

Pipeline:
  1. Build augmented rows
  2. All-zero system -> zero vector
  3. Drop duplicate / parallel equations
  4. Screen for equal-right and equal-left contradictions
  5. Pin excess unknowns of underdetermined systems to 0
  6. Unknowns absent from every equation -> 0
  7. Two equations over two unknowns -> closed form
  8. Iterative elimination until every unknown is resolved

Systems with infinitely many solutions return one representative solution
(free unknowns are 0). Inconsistent systems raise NoSolutionError.

Usage:
    import gauss
    x = gauss.solve([[2, 1], [1, -1]], [5, 1])   # -> array([2., 1.])
"""

import sys

import numpy as np

from gauss.system import (
    ZERO_EDGE, EquationSystem, ResultVector,
    normalize_underdetermined, resolve_zero_columns,
)
from gauss.screens import remove_redundant, check_equal_right, check_equal_left
from gauss.fastpath import solve_two_equations
from gauss.elimination import run
from gauss.detector import detect_system


def solve(matrix, constants, tol=ZERO_EDGE, verbose=False):
    """
    Solve Ax = b for a small dense system.

    Parameters
    ----------
    matrix : array-like or scipy.sparse matrix, shape (M, N)
        Coefficient matrix.
    constants : array-like, shape (M,)
        Right-hand side vector.
    tol : float
        Zero / equality tolerance. Default 1e-6.
    verbose : bool
        Print the structure report and each pipeline stage.

    Returns
    -------
    numpy.ndarray
        Solution vector x of length N, in the column order of `matrix`.

    Raises
    ------
    NoSolutionError
        If the equations are inconsistent.
    ValueError
        If `matrix` and `constants` do not describe a system.
    """
    system = EquationSystem.build(matrix, constants, tol=tol)
    result = ResultVector(system.num_unknowns)

    if verbose:
        report = detect_system(matrix, constants, tol=tol)
        print(f"  [Gauss] {report['shape'][0]} x {report['shape'][1]}, "
              f"density={report['density']:.1%}, strategy={report['strategy']}")
        sys.stdout.flush()

    if system.is_all_zero():
        return result.to_array()

    removed = remove_redundant(system)
    if verbose and removed:
        print(f"  [Gauss] Removed {removed} redundant equation(s)")

    check_equal_right(system)
    check_equal_left(system)

    fixed = normalize_underdetermined(system, result)
    if verbose and fixed:
        print(f"  [Gauss] Underdetermined: pinned {sorted(fixed)} to 0")

    zero = resolve_zero_columns(system, result)
    if verbose and zero:
        print(f"  [Gauss] Unconstrained unknowns {zero} set to 0")

    if solve_two_equations(system, result):
        if verbose:
            print("  [Gauss] Solved 2x2 in closed form")

    iterations = run(system, result, verbose=verbose)

    if verbose:
        print(f"  [Gauss] Done after {iterations} iteration(s)")
        sys.stdout.flush()

    return result.to_array()


def residual(matrix, constants, x):
    """
    Compute ||Ax - b|| for a candidate solution.

    Parameters
    ----------
    matrix : array-like or scipy.sparse matrix, shape (M, N)
    constants : array-like, shape (M,)
    x : array-like, shape (N,)

    Returns
    -------
    float
    """
    system = EquationSystem.build(matrix, constants)
    A = system.rows[:, :-1]
    b = system.rows[:, -1]
    return float(np.linalg.norm(A @ np.asarray(x, dtype=np.float64) - b))
