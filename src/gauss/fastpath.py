"""
Gauss Fast Paths: closed-form solving for trivial system shapes.

  - Two equations over the same two unknowns -> Cramer-style closed form
  - A single remaining equation -> resolved directly, free unknowns set to 0
"""

from gauss.system import NoSolutionError


def solve_two_equations(system, result):
    """
    Solve two equations that both use exactly the same two unknowns.

    With row 1 = (A1, B1 | C1) and row 2 = (A2, B2 | C2) at unknowns (p, q):
        y = (C2*A1 - A2*C1) / (B2*A1 - A2*B1)
        x = (C1 - B1*y) / A1

    Declines (returns False, system untouched) when the shape does not
    match, the unknown pairs differ, or the determinant vanishes.
    Both rows are consumed on success.

    Returns
    -------
    bool
        True if the two unknowns were resolved.
    """
    if system.num_equations != 2:
        return False
    if system.count_nonzero(0) != 2 or system.count_nonzero(1) != 2:
        return False

    first = system.nonzero_indexes(0)
    if first != system.nonzero_indexes(1):
        return False

    p, q = first
    a1, b1, c1 = (float(v) for v in system.rows[0, [p, q, -1]])
    a2, b2, c2 = (float(v) for v in system.rows[1, [p, q, -1]])

    det = b2 * a1 - a2 * b1
    if abs(det) < system.tol:
        return False

    y = (c2 * a1 - a2 * c1) / det
    x = (c1 - b1 * y) / a1
    result.set(p, x)
    result.set(q, y)

    system.remove(1)
    system.remove(0)
    return True


def solve_single_equation(system, result):
    """
    Resolve the last remaining equation directly.

      - more than two unknowns: the first takes constant / coefficient,
        the rest are set to 0
      - exactly two unknowns: the first is set to 0, the second takes
        constant / coefficient
      - one unknown: constant / coefficient, every other unresolved slot 0
      - no unknowns: vacuous if the constant is zero, otherwise a
        contradiction

    Returns
    -------
    bool
        True if the equation was consumed.
    """
    if system.num_equations != 1:
        return False

    indexes = system.nonzero_indexes(0)
    c = system.constant(0)

    if len(indexes) > 2:
        result.set(indexes[0], c / system.rows[0, indexes[0]])
        for k in indexes[1:]:
            result.set(k, 0.0)
    elif len(indexes) == 2:
        result.set(indexes[0], 0.0)
        result.set(indexes[1], c / system.rows[0, indexes[1]])
    else:
        if not indexes and abs(c) >= system.tol:
            raise NoSolutionError(
                f"System has no solution: 0 = {c:g} after elimination"
            )
        for k in result.unresolved():
            if k in indexes:
                result.set(k, c / system.rows[0, k])
            else:
                result.set(k, 0.0)

    system.remove(0)
    return True
