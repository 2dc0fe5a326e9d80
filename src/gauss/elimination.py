"""
Gauss Elimination: iterative row reduction with resolution and cleanup.

Each iteration of the main loop:
  1. Resolve a lone remaining equation directly
  2. Pairwise row reduction on the diagonal pivots
  3. Reject rows of the form 0 = c (c != 0)
  4. Resolve rows with a single unknown and back-substitute
  5. Drop rows that became 0 = 0

An iteration that changes nothing reruns the reduction as a
partial-pivoting Gauss-Jordan sweep; if that is also stuck, one free
unknown is pinned to zero. Every iteration therefore either shrinks the
system, resolves an unknown, or rewrites a row.
"""

import sys

import numpy as np

from gauss.system import NoSolutionError, fix_unknowns
from gauss.fastpath import solve_single_equation


# ============================================================
# Row reduction
# ============================================================

def eliminate(system):
    """
    One pass of pairwise reduction on the diagonal pivots.

    For pivot row i and every other row j, row j loses
    (row_j[i] / row_i[i]) * row i. The update is skipped when it would
    cancel row j's constant, which would turn an informative equation
    into a degenerate one. Entries that end up below tolerance are
    snapped to zero. Stops as soon as a row has a single unknown left.
    """
    rows = system.rows
    tol = system.tol
    m = system.num_equations

    for i in range(min(m, system.num_unknowns)):
        pivot = rows[i, i]
        if abs(pivot) < tol:
            continue
        for j in range(m):
            if j == i:
                continue
            multiplier = rows[j, i] / pivot
            if abs(rows[j, -1] - rows[i, -1] * multiplier) < tol:
                continue
            rows[j] -= rows[i] * multiplier
            rows[j, np.abs(rows[j]) < tol] = 0.0

        if system.has_single_unknown_row():
            return


def sweep(system):
    """Reduce the system to reduced row echelon form with partial pivoting."""
    rows = system.rows
    tol = system.tol
    m = system.num_equations
    lead = 0

    for col in range(system.num_unknowns):
        if lead >= m:
            break
        best = int(np.argmax(np.abs(rows[lead:, col]))) + lead
        if abs(rows[best, col]) < tol:
            continue

        rows[[lead, best]] = rows[[best, lead]]
        rows[lead] /= rows[lead, col]
        for r in range(m):
            if r != lead:
                rows[r] -= rows[r, col] * rows[lead]
        rows[np.abs(rows) < tol] = 0.0
        lead += 1


# ============================================================
# Checks, resolution and cleanup
# ============================================================

def check_contradiction(system):
    """Raise NoSolutionError if some row reads 0 = c with c != 0."""
    for i in range(system.num_equations):
        if system.count_nonzero(i) == 0 and abs(system.constant(i)) >= system.tol:
            raise NoSolutionError(
                f"System has no solution: 0 = {system.constant(i):g} after elimination"
            )


def resolve_single_unknown(system, result):
    """
    Resolve the first row with exactly one unknown and substitute the
    value into every other row.

    Returns
    -------
    bool
        True if a row was resolved.
    """
    for i in range(system.num_equations):
        indexes = system.nonzero_indexes(i)
        if len(indexes) != 1:
            continue
        k = indexes[0]
        value = system.constant(i) / system.rows[i, k]
        result.set(k, value)
        system.remove(i)
        system.substitute(k, value)
        return True
    return False


def remove_zero_rows(system):
    """Drop rows reading 0 = 0. Returns the number removed."""
    removed = 0
    i = 0
    while i < system.num_equations:
        if system.is_zero_row(i):
            system.remove(i)
            removed += 1
        else:
            i += 1
    return removed


def fix_free_unknown(system, result):
    """
    Pin one unconstrained unknown to zero.

    Expects a system in reduced row echelon form: the last unknown of
    the first multi-term row is then a free column. Falls back to the
    last unresolved unknown when no such row exists.

    Returns
    -------
    int
        Index of the pinned unknown.
    """
    for i in range(system.num_equations):
        indexes = system.nonzero_indexes(i)
        if len(indexes) > 1:
            k = indexes[-1]
            break
    else:
        k = result.unresolved()[-1]

    fix_unknowns(system, result, [k])
    return k


# ============================================================
# Main loop
# ============================================================

def _reduce_and_resolve(system, result, reduce):
    reduce(system)
    check_contradiction(system)
    while resolve_single_unknown(system, result):
        pass
    remove_zero_rows(system)


def _size(system, result):
    return system.num_equations + len(result.unresolved())


def run(system, result, verbose=False, stagnation_patience=3):
    """
    Drive the elimination loop until every unknown is resolved and no
    equation remains.

    Parameters
    ----------
    system : EquationSystem
        Consumed in place.
    result : ResultVector
        Filled in place.
    verbose : bool
        Print one line per loop iteration.
    stagnation_patience : int
        Consecutive iterations without a removed row or a resolved unknown
        before the loop switches to the Gauss-Jordan sweep. Default 3.

    Returns
    -------
    int
        Number of iterations.

    Raises
    ------
    NoSolutionError
        If a row reduces to 0 = c with c != 0.
    """
    iterations = 0
    stagnant = 0
    while not result.is_complete() or system.num_equations:
        iterations += 1
        size = _size(system, result)
        rows = system.rows.copy()

        if solve_single_equation(system, result):
            if verbose:
                print(f"  [Gauss] iter {iterations}: single equation resolved")
                sys.stdout.flush()
            continue

        if stagnant < stagnation_patience:
            _reduce_and_resolve(system, result, eliminate)
        stuck = np.array_equal(rows, system.rows) or stagnant >= stagnation_patience

        if _size(system, result) == size and stuck:
            _reduce_and_resolve(system, result, sweep)
            if _size(system, result) == size:
                k = fix_free_unknown(system, result)
                if verbose:
                    print(f"  [Gauss] iter {iterations}: stalled, free unknown x{k} = 0")
                    sys.stdout.flush()

        stagnant = 0 if _size(system, result) < size else stagnant + 1

        if verbose:
            print(f"  [Gauss] iter {iterations}: {system.num_equations} equations left, "
                  f"{len(result.unresolved())} unknowns unresolved")
            sys.stdout.flush()

    return iterations
