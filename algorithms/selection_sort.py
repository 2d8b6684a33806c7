"""
selection_sort.py — Selection Sort
====================================
For each position, scan the unsorted suffix for the minimum and swap it
into place.  The current position is potential-swap, the bar under the
scan is comparing, and the best candidate so far is held as swap.
Exactly one swap per position (none when it is already the minimum).
"""

from typing import List

from model import ElementStatus
from algorithms.context import SortingContext


PSEUDOCODE: List[str] = [
    "def SelectionSort(a):",                          # 0
    "    for i in 0 .. n-2:",                          # 1
    "        min ← i",                                # 2
    "        for j in i+1 .. n-1:",                    # 3
    "            if a[j] < a[min]: min ← j",          # 4
    "        if min ≠ i: swap(a[i], a[min])",         # 5
]


async def selection_sort(ctx: SortingContext) -> None:
    values = ctx.shadow_values()
    n = len(values)

    for i in range(n - 1):
        min_idx = i
        ctx.mark(i, ElementStatus.POTENTIAL_SWAP)

        for j in range(i + 1, n):
            ctx.mark(j, ElementStatus.COMPARING)
            ctx.count_comparison()
            if await ctx.stop_or_pause():
                return

            if values[j] < values[min_idx]:
                if min_idx != i:
                    ctx.mark(min_idx, ElementStatus.DEFAULT)
                min_idx = j
                ctx.mark(min_idx, ElementStatus.SWAP)
            else:
                ctx.mark(j, ElementStatus.DEFAULT)

            if await ctx.stop_or_pause():
                return

        if min_idx != i:
            ctx.mark(i, ElementStatus.SWAP)
            if await ctx.stop_or_pause():
                return
            values[i], values[min_idx] = values[min_idx], values[i]
            ctx.swap(min_idx, i)
            ctx.mark(min_idx, ElementStatus.DEFAULT)

        ctx.mark(i, ElementStatus.SORTED)
        if await ctx.stop_or_pause():
            return

    if n:
        ctx.mark(n - 1, ElementStatus.SORTED)
    await ctx.complete()
