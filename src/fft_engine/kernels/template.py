"""
Source template for fully unrolled kernels.

One parametric template, keyed by (size, stage count, swap-pair list),
renders the whole transform for a given N as straight-line Python:

- every butterfly of every stage is an explicit statement,
- twiddle constants are literals taken from the shared twiddle table,
- W^0 and W^{N/4} butterflies collapse to add/sub and a swap of parts,
- the signed sine of each distinct twiddle is computed once per call and
  reused by all butterflies that share it,
- the bit-reversal permutation is a fixed list of swaps,
- normalization uses a literal 1/sqrt(N).

The arithmetic order matches the reference kernel, so results agree with it
to the last bit.
"""

import math
import numpy as np
from typing import Iterator, List, NamedTuple

from ..core.bitrev import BitReversalTable
from ..core.twiddle import TwiddleTable


class Butterfly(NamedTuple):
    stage: int
    top: int
    bottom: int
    twiddle: int


def stage_twiddle_indices(perm: np.ndarray, stage: int) -> np.ndarray:
    """
    Twiddle index of each butterfly group in a stage.

    In stage l (0-based) the array splits into 2^l groups of 2*n2 samples;
    every butterfly of group g uses W^p with p = reverse(2g, log2(N)).
    """
    groups = 1 << stage
    return perm[2 * np.arange(groups)]


def butterfly_schedule(perm: np.ndarray) -> Iterator[Butterfly]:
    """All butterflies of a size-N transform, in execution order."""
    n = perm.size
    n_stages = n.bit_length() - 1
    for stage in range(n_stages):
        n2 = n >> (stage + 1)
        for g, p in enumerate(stage_twiddle_indices(perm, stage).tolist()):
            base = 2 * n2 * g
            for j in range(n2):
                yield Butterfly(stage, base + j, base + j + n2, p)


def _butterfly_lines(b: Butterfly, n: int, table: TwiddleTable) -> List[str]:
    t, u = b.top, b.bottom
    if b.twiddle == 0:
        lines = [
            f"t_re = re[{u}]",
            f"t_im = im[{u}]",
        ]
    elif b.twiddle == n // 4:
        lines = [
            f"t_re = sign * im[{u}]",
            f"t_im = -sign * re[{u}]",
        ]
    else:
        c = repr(float(table.cos[b.twiddle]))
        s = f"s{b.twiddle}"
        lines = [
            f"t_re = re[{u}] * {c} + im[{u}] * {s}",
            f"t_im = im[{u}] * {c} - re[{u}] * {s}",
        ]
    lines += [
        f"re[{u}] = re[{t}] - t_re",
        f"im[{u}] = im[{t}] - t_im",
        f"re[{t}] = re[{t}] + t_re",
        f"im[{t}] = im[{t}] + t_im",
    ]
    return lines


def render_unrolled_source(
    func_name: str,
    table: TwiddleTable,
    bit_reversal: BitReversalTable
) -> str:
    """
    Render the unrolled transform for one size.

    The generated function has the signature ``func_name(re, im, sign)``,
    transforms ``re``/``im`` in place, and takes sign=+1.0 for the forward
    transform and -1.0 for the inverse.
    """
    n = table.size
    n_stages = n.bit_length() - 1
    schedule = list(butterfly_schedule(bit_reversal.permutation))
    shared = sorted({b.twiddle for b in schedule} - {0, n // 4})

    body = [f"# N={n}, {n_stages} stages, {len(schedule)} butterflies"]
    for p in shared:
        body.append(f"s{p} = sign * {float(table.sin[p])!r}")

    stage = -1
    for b in schedule:
        if b.stage != stage:
            stage = b.stage
            body.append(f"# stage {stage + 1}: span {n >> (stage + 1)}")
        body.extend(_butterfly_lines(b, n, table))

    body.append("# bit reversal")
    for i, j in bit_reversal.pairs():
        body += [
            f"t_re = re[{i}]", f"re[{i}] = re[{j}]", f"re[{j}] = t_re",
            f"t_im = im[{i}]", f"im[{i}] = im[{j}]", f"im[{j}] = t_im",
        ]

    body.append(f"norm = {1.0 / math.sqrt(n)!r}")
    body += [
        f"for i in range({n}):",
        "    re[i] *= norm",
        "    im[i] *= norm",
    ]

    lines = [f"def {func_name}(re, im, sign):"]
    lines += ["    " + line for line in body]
    return "\n".join(lines) + "\n"
