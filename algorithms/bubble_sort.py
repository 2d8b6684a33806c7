"""
bubble_sort.py — Bubble Sort
==============================
Adjacent compare-and-swap passes, each one shorter than the last.

Per comparison:
  left bar   → potential-swap, right bar → comparing
  +1 comparison, +2 array accesses, suspend
  out of order → right bar swap, suspend, swap, colours flip, suspend

A pass without a single swap means the remaining prefix is already in
order: every bar left is marked sorted in one batch and the sort ends.
"""

from typing import List

from model import ElementStatus
from algorithms.context import SortingContext


PSEUDOCODE: List[str] = [
    "def BubbleSort(a):",                              # 0
    "    for i in 0 .. n-2:",                           # 1
    "        swapped ← false",                         # 2
    "        for j in 0 .. n-i-2:",                     # 3
    "            if a[j] > a[j+1]:",                   # 4
    "                swap(a[j], a[j+1])",              # 5
    "                swapped ← true",                  # 6
    "        if not swapped: break",                   # 7
]


async def bubble_sort(ctx: SortingContext) -> None:
    values = ctx.shadow_values()
    n = len(values)

    for i in range(n - 1):
        swapped = False

        for j in range(n - i - 1):
            ctx.mark(j, ElementStatus.POTENTIAL_SWAP)
            ctx.mark(j + 1, ElementStatus.COMPARING)
            ctx.count_comparison()
            if await ctx.stop_or_pause():
                return

            if values[j] > values[j + 1]:
                ctx.mark(j + 1, ElementStatus.SWAP)
                if await ctx.stop_or_pause():
                    return

                values[j], values[j + 1] = values[j + 1], values[j]
                ctx.swap(j, j + 1)
                swapped = True

                ctx.mark(j, ElementStatus.SWAP)
                ctx.mark(j + 1, ElementStatus.POTENTIAL_SWAP)
                if await ctx.stop_or_pause():
                    return

            ctx.mark(j, ElementStatus.DEFAULT)
            ctx.mark(j + 1, ElementStatus.DEFAULT)

        if not swapped:
            for k in range(n - i):
                ctx.mark(k, ElementStatus.SORTED)
            break

        ctx.mark(n - i - 1, ElementStatus.SORTED)
        if await ctx.stop_or_pause():
            return

    if n:
        ctx.mark(0, ElementStatus.SORTED)
    await ctx.complete()
