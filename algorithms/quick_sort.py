"""
quick_sort.py — Quick Sort (Lomuto)
====================================
Pivot = last element of the current subrange.  Left partition is
sorted before the right one; the pivot index is excluded from both.

Yields a Step at:
  1. Subarray [low, high] about to be partitioned
  2. Pivot selected
  3. Every candidate compared against the pivot
  4. Swap            →  only when i != j
  5. Pivot placed    →  only when it actually moves

Accounting: one comparison per scanned element, one swap per swap
performed, final pivot placement included.
"""

from typing import Generator, Iterator, List

from algorithms.base import SortEngine, SortResult
from algorithms.step import Step, StepType


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def quick_sort(arr, low, high):",          # 0
    "    if low < high:",                       # 1
    "        p ← partition(arr, low, high)",    # 2
    "        quick_sort(arr, low, p - 1)",      # 3
    "        quick_sort(arr, p + 1, high)",     # 4
    "def partition(arr, low, high):",           # 5
    "    pivot ← arr[high]",                    # 6
    "    i ← low - 1",                          # 7
    "    for j in low .. high-1:",              # 8
    "        if arr[j] < pivot:",               # 9
    "            i ← i + 1; swap(arr[i], arr[j])",  # 10
    "    swap(arr[i + 1], arr[high])",          # 11
    "    return i + 1",                         # 12
]


class QuickSort(SortEngine):
    LABEL = "Quick Sort"

    def _sort_steps(self) -> Iterator[Step]:
        yield from self._quick_sort(0, len(self.array) - 1)

    def _quick_sort(self, low: int, high: int) -> Iterator[Step]:
        if low >= high:
            return

        yield self._sb.build(
            StepType.SUBARRAY, f"Sorting subarray from index {low} to {high}",
            array=self.array, indices=(low, high),
            overlay={"low": low, "high": high},
            pseudocode_line=1,
        )

        pivot_index = yield from self._partition(low, high)

        yield from self._quick_sort(low, pivot_index - 1)
        yield from self._quick_sort(pivot_index + 1, high)

    def _partition(self, low: int, high: int) -> Generator[Step, None, int]:
        arr = self.array
        sb = self._sb
        pivot = arr[high]

        yield sb.build(
            StepType.PIVOT_SELECT, f"Selected pivot: {pivot} at index {high}",
            array=arr, indices=(high,), overlay={"pivot": pivot, "pivot_index": high},
            pseudocode_line=6,
        )

        i = low - 1
        for j in range(low, high):
            self.comparisons += 1
            yield sb.build(
                StepType.COMPARE, f"Comparing {arr[j]} with pivot {pivot}",
                array=arr, indices=(j, high), overlay={"pivot": pivot},
                pseudocode_line=9,
            )

            if arr[j] < pivot:
                i += 1
                if i != j:
                    arr[i], arr[j] = arr[j], arr[i]
                    self.swaps += 1
                    yield sb.build(
                        StepType.SWAP, f"Swapped {arr[i]} and {arr[j]}",
                        array=arr, indices=(i, j),
                        pseudocode_line=10,
                    )

        final = i + 1
        if final != high:
            arr[final], arr[high] = arr[high], arr[final]
            self.swaps += 1
            yield sb.build(
                StepType.PIVOT_PLACE, f"Placed pivot {pivot} in correct position {final}",
                array=arr, indices=(final, high),
                overlay={"pivot": pivot, "pivot_final_index": final},
                pseudocode_line=11,
            )

        return final


def quick_sort(values) -> SortResult:
    return QuickSort(values).sort()
