# python
"""Batch execution of rename requests.

Runs a list of requests through one executor in the order given, showing a
progress bar, and logs a per-outcome summary at the end. Each request stands
alone: a failure is recorded and the batch moves on, and nothing is rolled
back.
"""
from collections import Counter
from typing import Iterable

from tqdm import tqdm

from mediarenamer.rename.core import RenameExecutor
from mediarenamer.rename.models import RenameOutcome, RenameRequest, RenameResult
from mediarenamer.utils import LogLevel, logger


def rename_batch(
        requests: Iterable[RenameRequest],
        executor: RenameExecutor | None = None,
        show_progress: bool = True,
) -> list[RenameResult]:
    """Execute `requests` sequentially and return one result per request.

    Args:
        requests (Iterable[RenameRequest]): Requests to run, in order. Callers
            renaming a hierarchy decide the order (e.g. episodes before their
            series folder).
        executor (RenameExecutor | None): Executor to use; a local-disk one by default.
        show_progress (bool): Show a tqdm progress bar.

    Returns:
        list[RenameResult]: Results in the same order as `requests`.
    """
    executor = executor or RenameExecutor()
    pending = list(requests)
    results: list[RenameResult] = []

    for request in tqdm(pending, desc="Renaming", disable=not show_progress):
        results.append(executor.execute(request))

    counts = summarize(results)
    logger.log(
        "batch.summary",
        LogLevel.INFO,
        total=len(results),
        **{outcome.value: count for outcome, count in counts.items()},
    )
    return results


def summarize(results: Iterable[RenameResult]) -> dict[RenameOutcome, int]:
    """Count results per outcome."""
    return dict(Counter(result.outcome for result in results))
