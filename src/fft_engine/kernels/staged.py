"""
Vectorized stage-plan kernels for medium and large sizes.

Each stage of the decimation-in-time transform splits the buffers into
2^l groups of 2*n2 samples, and every butterfly in a group shares one
twiddle factor. Viewing the buffers as (groups, 2, n2) turns a whole stage
into a handful of numpy operations, with the per-group twiddles broadcast
across the butterflies that share them.
"""

import logging
from typing import List, NamedTuple

import numpy as np

from .. import config
from ..core.bitrev import get_bit_reversal
from ..core.kernel import Kernel
from ..core.reference import scale
from ..core.twiddle import get_twiddle_cache
from ..core.validation import check_size
from .template import stage_twiddle_indices

logger = logging.getLogger(__name__)


class Stage(NamedTuple):
    groups: int
    n2: int
    cos: np.ndarray       # (groups, 1)
    sin: np.ndarray       # (groups, 1), forward sign
    sin_inv: np.ndarray   # (groups, 1), inverse sign


def build_stage_plan(size: int) -> List[Stage]:
    """Precompute per-stage group twiddles from the shared tables."""
    table = get_twiddle_cache().get(size)
    perm = get_bit_reversal().for_size(size).permutation

    plan = []
    for stage in range(size.bit_length() - 1):
        p = stage_twiddle_indices(perm, stage)
        cos = table.cos[p].reshape(-1, 1)
        sin = table.sin[p].reshape(-1, 1)
        sin_inv = -sin
        for arr in (cos, sin, sin_inv):
            arr.setflags(write=False)
        plan.append(Stage(p.size, size >> (stage + 1), cos, sin, sin_inv))
    return plan


class StagedKernel(Kernel):
    """
    FFT for one size, executed as a precomputed sequence of vectorized stages.
    """

    priority = config.SPECIALIZED_PRIORITY
    is_genuine = True

    def __init__(self, size: int):
        self.size = check_size(size)
        self.priority = config.LARGE_SIZE_PRIORITY.get(self.size, config.SPECIALIZED_PRIORITY)
        self.description = self.summary(self.size)
        self._plan = build_stage_plan(self.size)
        self._bit_reversal = get_bit_reversal().for_size(self.size)
        logger.debug(f"Built stage plan for N={self.size} ({len(self._plan)} stages)")

    @classmethod
    def summary(cls, size: int) -> str:
        n_stages = size.bit_length() - 1
        return (
            f"Vectorized stage-plan FFT for N={size} "
            f"({n_stages} stages, shared group twiddles, precomputed swaps)"
        )

    @property
    def num_stages(self) -> int:
        return len(self._plan)

    def _execute(self, re: np.ndarray, im: np.ndarray, forward: bool) -> None:
        for stage in self._plan:
            v_re = re.reshape(stage.groups, 2, stage.n2)
            v_im = im.reshape(stage.groups, 2, stage.n2)
            top_re, bot_re = v_re[:, 0, :], v_re[:, 1, :]
            top_im, bot_im = v_im[:, 0, :], v_im[:, 1, :]

            c = stage.cos
            s = stage.sin if forward else stage.sin_inv

            t_re = bot_re * c + bot_im * s
            t_im = bot_im * c - bot_re * s
            np.subtract(top_re, t_re, out=bot_re)
            np.subtract(top_im, t_im, out=bot_im)
            top_re += t_re
            top_im += t_im

        self._bit_reversal.apply(re, im)
        scale(re, im)
