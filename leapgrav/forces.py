"""
This module implements the all-pairs gravitational acceleration with a hard interaction
cutoff.

cutoff_accelerations sums, for every body i, the Newtonian pull G * m_j / r^2 along the
unit displacement towards every other body j whose distance does not exceed the cutoff.
Self pairs are excluded and pairs beyond the cutoff contribute exactly zero. There is no
softening unless one is asked for, so two distinct bodies at the same position produce
non-finite accelerations; numpy's floating-point warnings are suppressed for that case
and the values propagate unchanged. Arithmetic stays in the dtype of the position array.
ForceEvaluator wraps the kernel with the configured constants and can split the target
rows across worker threads; each worker owns a disjoint block of rows and the blocks are
concatenated in row order, so the result does not depend on scheduling. The serial path
also walks the rows in blocks of block_rows targets, which keeps the displacement, r^2
and mask tensors at block_rows * N entries instead of N * N.
pairwise_contribution and reference_accelerations give the same law one pair at a time
in plain Python floats.
"""

from __future__ import annotations
import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .geometry_cache import geometry_buffers
from .sim_config import ConfigError

DEFAULT_BLOCK_ROWS = 256


def cutoff_accelerations(
    pos: NDArray[np.floating],
    mass: NDArray[np.floating],
    G: float,
    cutoff: float,
    softening: float = 0.0,
    rows: slice | None = None,
) -> NDArray[np.floating]:
    pos = np.asarray(pos)
    if not np.issubdtype(pos.dtype, np.floating):
        pos = pos.astype(float)
    dtype = pos.dtype
    m = np.asarray(mass, dtype=dtype).ravel()

    n = pos.shape[0]
    if rows is None:
        rows = slice(0, n)
    start, stop, _ = rows.indices(n)
    n_rows = max(0, stop - start)

    if n < 2 or n_rows == 0:
        return np.zeros((n_rows, 2), dtype=dtype)

    g = dtype.type(G)
    diff, r2, r = geometry_buffers(pos, slice(start, stop))

    # NaN distances fall through to the sum, as they would with "skip if r > cutoff"
    active = ~(r > dtype.type(cutoff))
    active[np.arange(n_rows), np.arange(start, stop)] = False

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if softening > 0.0:
            r2 = r2 + dtype.type(softening) * dtype.type(softening)
            r = np.sqrt(r2)
        a_mag = g * m[None, :] / r2
        contrib = (a_mag[..., None] * diff) / r[..., None]

    contrib = np.where(active[..., None], contrib, dtype.type(0.0))
    return contrib.sum(axis=1, dtype=dtype)


def pairwise_contribution(
    pos_i: Sequence[float],
    pos_j: Sequence[float],
    m_j: float,
    G: float,
    cutoff: float,
) -> Tuple[float, float]:
    dx = float(pos_j[0]) - float(pos_i[0])
    dy = float(pos_j[1]) - float(pos_i[1])
    r2 = dx * dx + dy * dy
    r = math.sqrt(r2)
    if r > cutoff:
        return 0.0, 0.0
    a_mag = G * float(m_j) / r2
    return a_mag * dx / r, a_mag * dy / r


def reference_accelerations(pos, mass, G: float, cutoff: float) -> List[Tuple[float, float]]:
    n = len(mass)
    out = [(0.0, 0.0) for _ in range(n)]
    for i in range(n):
        ax, ay = 0.0, 0.0
        for j in range(n):
            if i == j:
                continue
            cx, cy = pairwise_contribution(pos[i], pos[j], mass[j], G, cutoff)
            ax += cx
            ay += cy
        out[i] = (ax, ay)
    return out


class ForceEvaluator:
    """
    Callable acceleration kernel bound to G, the cutoff distance and the softening.

    Rows are evaluated in contiguous blocks of at most block_rows targets, so the pair
    tensors of one call hold block_rows * N entries rather than N * N. With n_workers > 1
    the rows are split into n_workers contiguous blocks that are evaluated on a thread
    pool and stitched back together in block order.
    """

    def __init__(self, G: float, cutoff: float, softening: float = 0.0, n_workers: int = 1,
                 block_rows: int = DEFAULT_BLOCK_ROWS):
        if float(softening) < 0.0:
            raise ConfigError(f"softening must be >= 0, got {softening}")
        if int(n_workers) < 1:
            raise ConfigError(f"n_workers must be at least 1, got {n_workers}")
        if int(block_rows) < 1:
            raise ConfigError(f"block_rows must be at least 1, got {block_rows}")
        self.G = float(G)
        self.cutoff = float(cutoff)
        self.softening = float(softening)
        self.n_workers = int(n_workers)
        self.block_rows = int(block_rows)
        self._executor: ThreadPoolExecutor | None = None

    @classmethod
    def from_config(cls, cfg) -> "ForceEvaluator":
        return cls(cfg.G, cfg.cutoff_distance, softening=cfg.softening, n_workers=cfg.n_workers)

    def _blocks(self, n: int) -> List[slice]:
        edges = np.linspace(0, n, min(self.n_workers, n) + 1).astype(int)
        return [slice(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.n_workers)
        return self._executor

    def _rows(self, pos: np.ndarray, mass: np.ndarray, rows: slice) -> np.ndarray:
        start, stop, _ = rows.indices(int(np.shape(pos)[0]))
        if stop - start <= self.block_rows:
            return cutoff_accelerations(pos, mass, self.G, self.cutoff, self.softening, rows)
        return np.concatenate([
            cutoff_accelerations(pos, mass, self.G, self.cutoff, self.softening,
                                 slice(a, min(a + self.block_rows, stop)))
            for a in range(start, stop, self.block_rows)
        ], axis=0)

    def __call__(self, pos: np.ndarray, mass: np.ndarray) -> np.ndarray:
        n = int(np.shape(pos)[0])
        if self.n_workers == 1 or n < 2 * self.n_workers:
            return self._rows(pos, mass, slice(0, n))

        futures = [
            self._pool().submit(self._rows, pos, mass, block)
            for block in self._blocks(n)
        ]
        return np.concatenate([f.result() for f in futures], axis=0)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "ForceEvaluator":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"ForceEvaluator(G={self.G}, cutoff={self.cutoff}, "
                f"softening={self.softening}, n_workers={self.n_workers})")
