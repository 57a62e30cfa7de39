"""
merge_sort.py — Merge Sort
===========================
Top-down recursive merge sort, generator-based (`yield from` carries
the recursion).

Yields a Step at:
  1. Divide [left, right] at mid            (before recursing)
  2. Merge start                            (copies of both sorted runs)
  3. Compare-and-place                      (both runs non-empty)
  4. Copy of a leftover element             (one run exhausted)
  5. Merge complete for [left, right]

Accounting: comparisons and swaps are BOTH counted once per element
placed while comparing.  Leftover copies count as neither; that
asymmetry is kept so totals match the classic textbook trace.

Stable: ties take from the left run (`<=`).
"""

from typing import Iterator, List

from algorithms.base import SortEngine, SortResult
from algorithms.step import Step, StepType


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def merge_sort(arr, left, right):",             # 0
    "    if left < right:",                          # 1
    "        mid ← (left + right) // 2",             # 2
    "        merge_sort(arr, left, mid)",            # 3
    "        merge_sort(arr, mid + 1, right)",       # 4
    "        merge(arr, left, mid, right)",          # 5
    "def merge(arr, left, mid, right):",             # 6
    "    L ← arr[left..mid], R ← arr[mid+1..right]", # 7
    "    while L and R not exhausted:",              # 8
    "        take smaller head (L on ties)",         # 9
    "    copy whatever is left of L, then R",        # 10
]


class MergeSort(SortEngine):
    LABEL = "Merge Sort"
    END_LINE = 5

    def _sort_steps(self) -> Iterator[Step]:
        yield from self._merge_sort(0, len(self.array) - 1)

    def _merge_sort(self, left: int, right: int) -> Iterator[Step]:
        if left >= right:
            return
        mid = (left + right) // 2

        yield self._sb.build(
            StepType.DIVIDE, f"Dividing array from index {left} to {right}",
            array=self.array, indices=(left, mid, right),
            overlay={"left": left, "mid": mid, "right": right},
            pseudocode_line=2,
        )

        yield from self._merge_sort(left, mid)
        yield from self._merge_sort(mid + 1, right)
        yield from self._merge(left, mid, right)

    def _merge(self, left: int, mid: int, right: int) -> Iterator[Step]:
        arr = self.array
        sb = self._sb
        left_run = arr[left:mid + 1]
        right_run = arr[mid + 1:right + 1]
        i = j = 0
        k = left

        yield sb.build(
            StepType.MERGE_START,
            f"Merging arrays from {left} to {mid} and {mid + 1} to {right}",
            array=arr, indices=(left, mid, right),
            overlay={
                "left": left, "mid": mid, "right": right,
                "left_run": tuple(left_run), "right_run": tuple(right_run),
            },
            pseudocode_line=7,
        )

        while i < len(left_run) and j < len(right_run):
            self.comparisons += 1
            compared = (left + i, mid + 1 + j)
            if left_run[i] <= right_run[j]:
                arr[k] = left_run[i]
                i += 1
            else:
                arr[k] = right_run[j]
                j += 1
            self.swaps += 1

            yield sb.build(
                StepType.COMPARE, f"Comparing and placing {arr[k]} at position {k}",
                array=arr, indices=compared,
                overlay={"position": k, "value": arr[k]},
                pseudocode_line=9,
            )
            k += 1

        for run, idx in ((left_run, i), (right_run, j)):
            for value in run[idx:]:
                arr[k] = value
                yield sb.build(
                    StepType.COPY, f"Copying remaining element {value} to position {k}",
                    array=arr, indices=(k,),
                    overlay={"position": k, "value": value},
                    pseudocode_line=10,
                )
                k += 1

        yield sb.build(
            StepType.MERGE_COMPLETE, f"Completed merging from {left} to {right}",
            array=arr, indices=(left, right),
            overlay={"left": left, "right": right},
            pseudocode_line=5,
        )


def merge_sort(values) -> SortResult:
    return MergeSort(values).sort()
