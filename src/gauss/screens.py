"""
Gauss Screens: redundancy removal and early contradiction detection.

Runs before elimination:
  1. Remove equations that are scalar multiples of an earlier one
  2. Reject equations that share a right-hand side but whose left-hand
     sides are non-trivial multiples of each other
  3. Reject equations whose left-hand sides coincide while the
     right-hand sides differ

The contradiction screens only catch these two shapes; the row-level
check in the elimination loop covers everything else.
"""

import numpy as np

from gauss.system import ZERO_EDGE, NoSolutionError


def is_proportional(a, b, tol=ZERO_EDGE):
    """
    Check whether two vectors are nonzero scalar multiples of each other.

    The elementwise ratio a[k] / b[k] must be the same (within tol) in
    every column. Columns that are zero in both vectors are skipped;
    a column that is zero in only one of them fails the test.

    Parameters
    ----------
    a, b : array-like
        Vectors of equal length.
    tol : float
        Zero / equality tolerance.

    Returns
    -------
    bool
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    a_zero = np.abs(a) < tol
    b_zero = np.abs(b) < tol

    if np.any(a_zero != b_zero):
        return False
    defined = ~a_zero
    if not np.any(defined):
        return False

    ratios = a[defined] / b[defined]
    return bool(np.all(np.abs(ratios - ratios[0]) < tol))


def find_proportional_pair(vectors, tol=ZERO_EDGE):
    """Return the first (i, j), i < j, of proportional vectors, or None."""
    count = len(vectors)
    for i in range(count):
        for j in range(i + 1, count):
            if is_proportional(vectors[i], vectors[j], tol):
                return i, j
    return None


def group_constants(system):
    """
    Group row indexes whose constants are equal within tolerance.

    Each group is keyed by the first constant that opened it, in row order.
    """
    groups = []
    for i in range(system.num_equations):
        c = system.constant(i)
        for group in groups:
            if abs(system.constant(group[0]) - c) < system.tol:
                group.append(i)
                break
        else:
            groups.append([i])
    return groups


def remove_redundant(system):
    """
    Drop equations that are scalar multiples of an earlier equation.

    Rescans from the start after each removal until a full scan finds
    nothing.

    Returns
    -------
    int
        Number of rows removed.
    """
    removed = 0
    while True:
        pair = find_proportional_pair(system.rows, system.tol)
        if pair is None:
            return removed
        system.remove(pair[1])
        removed += 1


def check_equal_right(system):
    """
    Raise NoSolutionError when two equations share a constant but their
    left-hand sides are different multiples of each other.
    """
    for group in group_constants(system):
        if len(group) < 2:
            continue
        left = system.rows[group, :-1]
        if find_proportional_pair(left, system.tol) is not None:
            raise NoSolutionError(
                f"System has no solution: equations {group} share the right-hand "
                f"side {system.constant(group[0]):g} with proportional left-hand sides"
            )


def check_equal_left(system):
    """
    Raise NoSolutionError when two left-hand sides are proportional and
    fewer than two constant values repeat across the system.
    """
    pair = find_proportional_pair(system.rows[:, :-1], system.tol)
    if pair is None:
        return

    repeated = sum(1 for group in group_constants(system) if len(group) > 1)
    if repeated < 2:
        raise NoSolutionError(
            f"System has no solution: equations {pair[0]} and {pair[1]} have "
            f"proportional left-hand sides but different right-hand sides"
        )
