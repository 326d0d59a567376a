"""
Dense linear equation solver
"""

import numpy as np

from racer.errors import SingularSystem


def solve_gauss(a: np.ndarray, b: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting

    Args:
        a: Coefficient matrix (n x n)
        b: Right-hand side (n)
        eps: Smallest pivot magnitude accepted

    Returns:
        Solution vector x (n)

    Raises:
        SingularSystem: If no pivot of magnitude >= eps exists in some column
    """
    a = np.array(a, dtype=float)
    b = np.array(b, dtype=float)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"coefficient matrix must be square, got shape {a.shape}")
    n = a.shape[0]
    if b.shape != (n,):
        raise ValueError(f"right-hand side must have shape ({n},), got {b.shape}")

    # Forward elimination
    for k in range(n):
        p = k + int(np.argmax(np.abs(a[k:, k])))
        pivot = a[p, k]
        if not np.isfinite(pivot) or abs(pivot) < eps:
            raise SingularSystem(f"pivot {pivot!r} in column {k} is below {eps}")

        if p != k:
            a[[k, p]] = a[[p, k]]
            b[[k, p]] = b[[p, k]]

        factors = a[k + 1:, k] / pivot
        a[k + 1:, k:] -= np.outer(factors, a[k, k:])
        b[k + 1:] -= factors * b[k]

    # Back substitution
    x = np.zeros(n)
    for k in range(n - 1, -1, -1):
        x[k] = (b[k] - a[k, k + 1:] @ x[k + 1:]) / a[k, k]

    return x
