"""
Gauss System: augmented equation rows and the result vector.

An EquationSystem keeps every equation as one row of a float64 array:
N coefficients followed by the constant term. Rows are only ever
removed while solving; the column space never changes.

Usage:
    from gauss.system import EquationSystem, ResultVector

    system = EquationSystem.build([[2, 1], [1, -1]], [5, 1])
    result = ResultVector(system.num_unknowns)
"""

import numpy as np
from scipy import sparse


# Values closer to zero than this are treated as zero, and two values
# closer than this are treated as equal.
ZERO_EDGE = 1e-6


class NoSolutionError(RuntimeError):
    """Raised when the equations of a system contradict each other."""
    pass


# ============================================================
# EquationSystem: the shrinking collection of augmented rows
# ============================================================

class EquationSystem:
    """
    Mutable collection of augmented equation rows.

    Parameters
    ----------
    rows : array-like, shape (M, N + 1)
        Augmented rows (coefficients followed by the constant). Copied.
    tol : float
        Zero / equality tolerance used by every row query.

    Examples
    --------
    >>> system = EquationSystem.build([[1, 1], [1, -1]], [2, 0])
    >>> system.nonzero_indexes(0)
    [0, 1]
    """

    def __init__(self, rows, tol=ZERO_EDGE):
        self.rows = np.array(rows, dtype=np.float64)
        if self.rows.ndim != 2 or self.rows.shape[1] < 2:
            raise ValueError(
                f"Augmented rows must have shape (M, N + 1), got {self.rows.shape}"
            )
        self.tol = tol

    @classmethod
    def build(cls, matrix, constants, tol=ZERO_EDGE):
        """
        Assemble augmented rows from a coefficient matrix and constants.

        Parameters
        ----------
        matrix : array-like or scipy.sparse matrix, shape (M, N)
            Coefficients, one row per equation.
        constants : array-like, shape (M,)
            Right-hand side of each equation.
        tol : float
            Zero / equality tolerance.

        Returns
        -------
        EquationSystem
        """
        if sparse.issparse(matrix):
            matrix = matrix.toarray()
        A = np.asarray(matrix, dtype=np.float64)
        b = np.asarray(constants, dtype=np.float64).ravel()

        if A.ndim != 2 or A.shape[0] == 0 or A.shape[1] == 0:
            raise ValueError(f"No equations provided (matrix shape {A.shape})")
        if A.shape[0] != b.shape[0]:
            raise ValueError(
                f"Matrix has {A.shape[0]} rows but {b.shape[0]} constants were given"
            )

        return cls(np.column_stack([A, b]), tol=tol)

    @property
    def num_equations(self):
        return self.rows.shape[0]

    @property
    def num_unknowns(self):
        return self.rows.shape[1] - 1

    def __len__(self):
        return self.num_equations

    def copy(self):
        return EquationSystem(self.rows, tol=self.tol)

    # --- row queries ---

    def coefficients(self, i):
        return self.rows[i, :-1]

    def constant(self, i):
        return float(self.rows[i, -1])

    def nonzero_indexes(self, i):
        """Indexes of the unknowns with a nonzero coefficient in row i."""
        return np.flatnonzero(np.abs(self.rows[i, :-1]) >= self.tol).tolist()

    def count_nonzero(self, i):
        return int(np.count_nonzero(np.abs(self.rows[i, :-1]) >= self.tol))

    def is_zero_row(self, i):
        return bool(np.all(np.abs(self.rows[i]) < self.tol))

    def is_all_zero(self):
        """True when every coefficient and constant is exactly zero."""
        return not np.any(self.rows)

    def has_single_unknown_row(self):
        return any(self.count_nonzero(i) == 1 for i in range(self.num_equations))

    def zero_columns(self):
        """Unknowns whose coefficient is zero in every row."""
        mask = np.all(np.abs(self.rows[:, :-1]) < self.tol, axis=0)
        return np.flatnonzero(mask).tolist()

    # --- mutation ---

    def remove(self, i):
        self.rows = np.delete(self.rows, i, axis=0)

    def zero_column(self, k):
        self.rows[:, k] = 0.0

    def substitute(self, k, value):
        """Move a resolved unknown into the constants and clear its column."""
        self.rows[:, -1] -= self.rows[:, k] * value
        self.rows[:, k] = 0.0

    def __repr__(self):
        return (f"EquationSystem(equations={self.num_equations}, "
                f"unknowns={self.num_unknowns}, tol={self.tol:g})")


# ============================================================
# ResultVector: one slot per unknown, resolved or not
# ============================================================

class ResultVector:
    """Per-unknown values plus a mask of the slots already resolved."""

    def __init__(self, num_unknowns):
        self.values = np.zeros(num_unknowns, dtype=np.float64)
        self.resolved = np.zeros(num_unknowns, dtype=bool)

    def __len__(self):
        return self.values.shape[0]

    def set(self, k, value):
        self.values[k] = value
        self.resolved[k] = True

    def is_resolved(self, k):
        return bool(self.resolved[k])

    def is_complete(self):
        return bool(np.all(self.resolved))

    def unresolved(self):
        return np.flatnonzero(~self.resolved).tolist()

    def to_array(self):
        return self.values.copy()

    def __repr__(self):
        return (f"ResultVector(size={len(self)}, "
                f"resolved={int(np.count_nonzero(self.resolved))})")


# ============================================================
# Pre-elimination normalization
# ============================================================

def fix_unknowns(system, result, indexes):
    """Pin the given unknowns to zero and clear their columns."""
    for k in indexes:
        result.set(k, 0.0)
        system.zero_column(k)


def normalize_underdetermined(system, result):
    """
    Zero-fill the trailing unknowns of a system with fewer equations
    than unknowns, leaving a square system.

    Only applies when more than one equation remains; a lone equation is
    handled by the single-equation resolver.

    Returns
    -------
    list of int
        Unknowns that were pinned to zero.
    """
    m, n = system.num_equations, system.num_unknowns
    difference = n - m
    if difference <= 0 or m <= 1:
        return []

    fixed = list(range(n - 1, n - difference - 1, -1))
    fix_unknowns(system, result, fixed)
    return fixed


def resolve_zero_columns(system, result):
    """Resolve unknowns that no remaining equation constrains to zero."""
    resolved = []
    for k in system.zero_columns():
        if not result.is_resolved(k):
            result.set(k, 0.0)
            resolved.append(k)
    return resolved
