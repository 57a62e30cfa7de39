"""
insertion_sort.py — Insertion Sort
===================================
Generator-based insertion sort.

Yields a Step at:
  1. Start                                  (first element counts as sorted)
  2. Select key at index i
  3. Every comparison of a predecessor with the key
  4. Every shift of a larger predecessor one slot right
  5. Key written back  →  only if it actually moved
  6. Iteration complete  →  prefix 0..i is sorted
  7. Complete

Accounting: one comparison per inner-loop test, one swap per shift.
Stable: the inner loop stops at the first predecessor <= key, so equal keys
keep their input order.
"""

from typing import Iterator, List

from algorithms.base import SortEngine, SortResult
from algorithms.step import Step, StepType


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                # 0
    "    for i in 1 .. n-1:",                   # 1
    "        key ← arr[i]",                     # 2
    "        j ← i - 1",                        # 3
    "        while j ≥ 0 and arr[j] > key:",    # 4
    "            arr[j + 1] ← arr[j]",          # 5
    "            j ← j - 1",                    # 6
    "        arr[j + 1] ← key",                 # 7
    "    return arr",                           # 8
]


class InsertionSort(SortEngine):
    LABEL = "Insertion Sort"
    END_LINE = 8

    def _start_message(self) -> str:
        return "Starting Insertion Sort - first element is considered sorted"

    def _sort_steps(self) -> Iterator[Step]:
        arr = self.array
        sb = self._sb

        for i in range(1, len(arr)):
            key = arr[i]
            j = i - 1

            yield sb.build(
                StepType.SELECT_KEY, f"Selected key: {key} at index {i}",
                array=arr, indices=(i,), overlay={"key": key, "key_index": i},
                pseudocode_line=2,
            )

            while j >= 0:
                self.comparisons += 1
                yield sb.build(
                    StepType.COMPARE, f"Comparing {arr[j]} with key {key}",
                    array=arr, indices=(j, i), overlay={"key": key},
                    pseudocode_line=4,
                )
                if arr[j] <= key:
                    break

                arr[j + 1] = arr[j]
                self.swaps += 1
                yield sb.build(
                    StepType.SHIFT, f"Shifted {arr[j + 1]} from position {j} to {j + 1}",
                    array=arr, indices=(j, j + 1), overlay={"from": j, "to": j + 1},
                    pseudocode_line=5,
                )
                j -= 1

            if j + 1 != i:
                arr[j + 1] = key
                yield sb.build(
                    StepType.INSERT, f"Inserted key {key} at position {j + 1}",
                    array=arr, indices=(j + 1,), overlay={"key": key, "position": j + 1},
                    pseudocode_line=7,
                )

            yield sb.build(
                StepType.ITERATION_COMPLETE,
                f"Completed iteration {i}. Elements 0 to {i} are now sorted",
                array=arr, overlay={"sorted_until": i},
                pseudocode_line=1,
            )


def insertion_sort(values) -> SortResult:
    return InsertionSort(values).sort()
