"""Corpus-wide search for the most distant least-common-subsumer pairs."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from wordnet_graph.exceptions import ScanCancelledError
from wordnet_graph.graph import EntityGraphView
from wordnet_graph.lcs import FRONTIER, LcsFinder, lcs_distance
from wordnet_graph.models import (
    LeastCommonSubsumer,
    ScanResult,
    Synset,
    WordCategory,
)

logger = logging.getLogger(__name__)


def hypernym_reach(view: EntityGraphView, synset: Synset) -> int:
    """Largest shortest hop count from ``synset`` to any of its hypernyms.

    The LCS distance of a pair can never exceed the sum of both reaches.
    """
    depth = {synset: 0}
    frontier = [synset]
    reach = 0
    while frontier:
        reach_next: list[Synset] = []
        for node in frontier:
            for hypernym in view.hypernyms(node):
                if hypernym not in depth:
                    depth[hypernym] = depth[node] + 1
                    reach_next.append(hypernym)
        if reach_next:
            reach += 1
        frontier = reach_next
    return reach


class CorpusLcsScanner:
    """Finds the pair(s) of synsets of one category that are farthest apart.

    Every unordered pair is evaluated with the LCS finder. The largest
    distance wins; records of equal distance accumulate. Work is split by
    outer index across ``workers`` threads and the partial results are
    combined with :meth:`ScanResult.merge`, which gives the same answer
    for any partitioning.
    """

    def __init__(
        self,
        finder: LcsFinder,
        *,
        workers: int = 1,
        prune: bool = True,
        strategy: str = FRONTIER,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self._finder = finder
        self._workers = workers
        self._prune = prune
        self._strategy = strategy

    def scan(
        self,
        category: WordCategory,
        *,
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """Scan every pair of synsets in ``category``.

        Raises:
            ScanCancelledError: if ``cancel_event`` is set during the scan.
        """
        category = WordCategory(category)
        synsets = list(self._finder.view.synsets(category))
        reach: dict[Synset, int] = {}
        if self._prune:
            reach = {s: hypernym_reach(self._finder.view, s) for s in synsets}
            # larger reaches first so the running maximum rises early
            synsets.sort(key=lambda s: (-reach[s], s.id))

        logger.info(
            f"Calculating longest shortest path for {category.value} "
            f"({len(synsets)} synsets, {self._workers} workers)..."
        )
        start_time = time.time()

        partitions = [
            list(range(w, len(synsets), self._workers))
            for w in range(self._workers)
        ]
        if self._workers == 1:
            result = self._scan_rows(synsets, partitions[0], reach, cancel_event)
        else:
            result = ScanResult.empty()
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                futures = [
                    pool.submit(
                        self._scan_rows, synsets, rows, reach, cancel_event
                    )
                    for rows in partitions
                ]
                for future in futures:
                    result = result.merge(future.result())

        duration = time.time() - start_time
        logger.info(
            f"Done scanning {category.value} ({duration:.2f} seconds): "
            f"distance {result.distance}, {len(result.records)} records, "
            f"{result.pairs_evaluated} pairs evaluated, "
            f"{result.pairs_skipped} skipped"
        )
        return result

    def _scan_rows(
        self,
        synsets: list[Synset],
        rows: list[int],
        reach: dict[Synset, int],
        cancel_event: threading.Event | None,
    ) -> ScanResult:
        """Evaluate pairs (i, j) with i in ``rows`` and j > i."""
        longest: int | None = None
        records: set[LeastCommonSubsumer] = set()
        evaluated = 0
        skipped = 0

        for i in rows:
            first = synsets[i]
            for j in range(i + 1, len(synsets)):
                if cancel_event is not None and cancel_event.is_set():
                    raise ScanCancelledError(
                        f"Scan cancelled after {evaluated} pairs"
                    )
                second = synsets[j]
                if (
                    reach
                    and longest is not None
                    and reach[first] + reach[second] < longest
                ):
                    skipped += 1
                    continue

                # records always run from the lower id to the higher one
                if first.id < second.id:
                    found = self._finder.find(first, second, self._strategy)
                else:
                    found = self._finder.find(second, first, self._strategy)
                evaluated += 1
                distance = lcs_distance(found)
                if distance is None:
                    continue
                if longest is None or distance > longest:
                    records = set(found)
                    longest = distance
                elif distance == longest:
                    records.update(found)
            logger.debug(
                f"Row {i} done ({first!r}): longest so far {longest}"
            )

        return ScanResult(
            distance=longest,
            records=frozenset(records),
            pairs_evaluated=evaluated,
            pairs_skipped=skipped,
        )
