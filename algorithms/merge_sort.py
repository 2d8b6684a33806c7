"""
merge_sort.py — Merge Sort
============================
Top-down merge sort on index ranges [lo, hi] (inclusive).

    sort(lo, hi):
        highlight lo..hi          (+1 access per bar)
        sort(lo, mid); sort(mid+1, hi)
        merge(lo, mid, hi)

merge() copies both halves into local buffers (+1 access per read), then
writes the merged run back one bar at a time (+1 access per write), each
write shown as swap with the new value and followed by a suspension.
Ties take the left element first, so equal values keep their order.

Unlike the swap-based sorts, accesses here are counted once per discrete
read or write, and a comparison adds no accesses of its own.
"""

import logging
from typing import List

from model import ElementStatus
from algorithms.context import SortingContext


logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def MergeSort(a, lo, hi):",                      # 0
    "    if lo >= hi: return",                        # 1
    "    mid ← (lo + hi) // 2",                       # 2
    "    MergeSort(a, lo, mid)",                      # 3
    "    MergeSort(a, mid+1, hi)",                    # 4
    "    L ← a[lo..mid]; R ← a[mid+1..hi]",           # 5
    "    while L and R:",                             # 6
    "        a[k++] ← L[0] <= R[0] ? L.pop() : R.pop()", # 7
    "    copy what is left of L, then R",             # 8
]


async def _write(ctx: SortingContext, values: List[int], k: int, value: int) -> bool:
    """Place one merged value.  Returns True when the run must stop."""
    values[k] = value
    ctx.mark(k, ElementStatus.SWAP, value)
    ctx.counters.add_accesses(1)
    if await ctx.stop_or_pause():
        return True
    ctx.mark(k, ElementStatus.DEFAULT)
    return False


async def _merge(ctx: SortingContext, values: List[int], lo: int, mid: int, hi: int) -> bool:
    left: List[int] = []
    right: List[int] = []
    for buffer, first, last in ((left, lo, mid), (right, mid + 1, hi)):
        for idx in range(first, last + 1):
            buffer.append(values[idx])
            ctx.counters.add_accesses(1)
            ctx.mark(idx, ElementStatus.COMPARING)
            if await ctx.stop_or_pause():
                return False

    i = j = 0
    k = lo
    while i < len(left) and j < len(right):
        ctx.counters.add_comparison()
        if left[i] <= right[j]:
            value = left[i]
            i += 1
        else:
            value = right[j]
            j += 1
        if await _write(ctx, values, k, value):
            return False
        k += 1

    for value in left[i:] + right[j:]:
        if await _write(ctx, values, k, value):
            return False
        k += 1
    return True


async def _sort_range(ctx: SortingContext, values: List[int], lo: int, hi: int) -> bool:
    """Sort values[lo..hi].  Returns False once the run is stopped."""
    if lo >= hi:
        return bool(ctx.running)

    mid = (lo + hi) // 2
    for idx in range(lo, hi + 1):
        ctx.mark(idx, ElementStatus.POTENTIAL_SWAP)
        ctx.counters.add_accesses(1)
    if await ctx.stop_or_pause():
        return False

    if not await _sort_range(ctx, values, lo, mid):
        return False
    if not await _sort_range(ctx, values, mid + 1, hi):
        return False
    return await _merge(ctx, values, lo, mid, hi)


async def merge_sort(ctx: SortingContext) -> None:
    values = ctx.shadow_values()
    if not await _sort_range(ctx, values, 0, len(values) - 1):
        return

    for idx in range(len(values) - 1):
        if values[idx] > values[idx + 1]:
            logger.error(
                "merge left positions %d (%d) and %d (%d) out of order",
                idx, values[idx], idx + 1, values[idx + 1],
            )
    await ctx.complete()
