from __future__ import annotations

from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
import logging
from typing import Callable, Mapping, TypeVar

from tradecheck.risk_engine.types import CheckFailure

logger = logging.getLogger(__name__)

T = TypeVar('T')


def run_all(tasks: Mapping[str, Callable[[], T]], max_workers: int = 4) -> dict[str, T | CheckFailure]:
    """Run every task and wait for all of them.

    A task that raises never cancels its siblings; its slot holds a
    CheckFailure instead of a value. Results keep the order of `tasks`.
    """
    if not tasks:
        return {}

    workers = max(1, min(max_workers, len(tasks)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='tradecheck') as executor:
        futures = {name: executor.submit(task) for name, task in tasks.items()}
        wait(futures.values(), return_when=ALL_COMPLETED)

    outcomes: dict[str, T | CheckFailure] = {}
    for name, future in futures.items():
        error = future.exception()
        if error is None:
            outcomes[name] = future.result()
            continue

        logger.error(
            'Check %s raised %s: %s',
            name,
            type(error).__name__,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
        outcomes[name] = CheckFailure(
            check_name=name,
            error_type=type(error).__name__,
            message=str(error),
        )
    return outcomes
