"""
shaker_sort.py — Shaker (Cocktail) Sort
=========================================
Bubble sort that alternates direction: a forward pass carries the largest
value to the right edge of the window, a backward pass carries the
smallest to the left edge.  The window shrinks from both ends, and a
pass in either direction without a swap finalises what is left of it.
"""

from typing import List, Tuple

from model import ElementStatus
from algorithms.context import SortingContext


PSEUDOCODE: List[str] = [
    "def ShakerSort(a):",                               # 0
    "    lo ← 0; hi ← n-1",                             # 1
    "    loop:",                                        # 2
    "        forward  lo .. hi-1, swap if a[i] > a[i+1]", # 3
    "        if no swap: break;  hi ← hi-1",            # 4
    "        backward hi-1 .. lo, swap if a[i] > a[i+1]", # 5
    "        if no swap: break;  lo ← lo+1",            # 6
]


async def _compare_pair(ctx: SortingContext, values: List[int], i: int) -> Tuple[bool, bool]:
    """
    One compare (and maybe swap) of positions i and i+1.
    Returns (stopped, swapped).
    """
    ctx.mark(i, ElementStatus.POTENTIAL_SWAP)
    ctx.mark(i + 1, ElementStatus.COMPARING)
    ctx.count_comparison()
    if await ctx.stop_or_pause():
        return True, False

    swapped = False
    if values[i] > values[i + 1]:
        ctx.mark(i + 1, ElementStatus.SWAP)
        if await ctx.stop_or_pause():
            return True, False

        values[i], values[i + 1] = values[i + 1], values[i]
        ctx.swap(i, i + 1)
        swapped = True

        ctx.mark(i, ElementStatus.SWAP)
        ctx.mark(i + 1, ElementStatus.POTENTIAL_SWAP)
        if await ctx.stop_or_pause():
            return True, True

    ctx.mark(i, ElementStatus.DEFAULT)
    ctx.mark(i + 1, ElementStatus.DEFAULT)
    return False, swapped


async def shaker_sort(ctx: SortingContext) -> None:
    values = ctx.shadow_values()
    lo, hi = 0, len(values) - 1

    while hi >= 0:
        # forward pass
        swapped = False
        for i in range(lo, hi):
            stopped, did_swap = await _compare_pair(ctx, values, i)
            if stopped:
                return
            swapped = swapped or did_swap

        ctx.mark(hi, ElementStatus.SORTED)
        if not swapped:
            for i in range(lo, hi):
                ctx.mark(i, ElementStatus.SORTED)
            break
        hi -= 1

        # backward pass
        swapped = False
        for i in range(hi - 1, lo - 1, -1):
            stopped, did_swap = await _compare_pair(ctx, values, i)
            if stopped:
                return
            swapped = swapped or did_swap

        ctx.mark(lo, ElementStatus.SORTED)
        if not swapped:
            for i in range(lo + 1, hi + 1):
                ctx.mark(i, ElementStatus.SORTED)
            break
        lo += 1

    await ctx.complete()
