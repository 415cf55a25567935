from __future__ import annotations

from typing import Any

import numpy as np

from framesvg.errors import SingularSystemError


DEFAULT_PIVOT_TOLERANCE = 1e-12


def solve(augmented: Any, *, tolerance: float = DEFAULT_PIVOT_TOLERANCE) -> np.ndarray:
    """Solve `A k = b` given the augmented matrix `[A | b]` of shape (n, n + 1).

    Gaussian elimination with partial pivoting followed by back substitution.
    The input is copied; the working matrix is eliminated in place.
    """

    a = np.array(augmented, dtype=np.float64)
    if a.ndim != 2 or a.shape[0] == 0 or a.shape[1] != a.shape[0] + 1:
        raise ValueError(f"augmented matrix must have shape (n, n + 1), got {a.shape}")
    if not np.all(np.isfinite(a)):
        raise ValueError("augmented matrix contains non-finite values")

    m = a.shape[0]
    threshold = tolerance * max(1.0, float(np.max(np.abs(a[:, :m]))))

    for k in range(m):
        i_max = k + int(np.argmax(np.abs(a[k:, k])))
        if abs(a[i_max, k]) <= threshold:
            raise SingularSystemError(f"zero pivot in column {k}")
        if i_max != k:
            a[[k, i_max]] = a[[i_max, k]]
        for i in range(k + 1, m):
            factor = a[i, k] / a[k, k]
            a[i, k + 1 :] -= factor * a[k, k + 1 :]
            a[i, k] = 0.0

    ks = np.zeros(m, dtype=np.float64)
    for i in range(m - 1, -1, -1):
        v = a[i, m] / a[i, i]
        ks[i] = v
        a[:i, m] -= a[:i, i] * v
        a[:i, i] = 0.0
    return ks
