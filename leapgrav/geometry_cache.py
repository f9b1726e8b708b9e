from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the pairwise geometry shared by the force evaluator and the energy diagnostics. The geometry_buffers function computes displacement vectors d[i, j] = pos[j] - pos[i], squared distances and distances for a block of target rows against every body, in the dtype of the position array, using Einstein summation for the squared norms. Rows can be restricted to a contiguous range so that the threaded force evaluator works on disjoint blocks. No softening or masking is applied here; callers decide how to treat the diagonal and coincident pairs.

"""




__all__ = ["geometry_buffers"]

def geometry_buffers(
    pos: np.ndarray,
    rows: slice | None = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pos = np.asarray(pos)
    if rows is None:
        rows = slice(0, pos.shape[0])

    diff = pos[None, :, :] - pos[rows, None, :]
    r2 = np.einsum("ijk,ijk->ij", diff, diff)
    r = np.sqrt(r2)
    return diff, r2, r
