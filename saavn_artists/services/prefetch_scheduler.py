"""Background warming of the next result page.

After a response is produced, :meth:`PrefetchScheduler.schedule` launches a
detached asyncio task that fetches ``page + 1`` of the same effective
query with a single upstream call and writes it to the cache.  The task
has no result channel back to the request: every failure is logged and
dropped, and nothing is retried.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import structlog

from saavn_artists.interfaces.cache_provider import ICacheProvider
from saavn_artists.models.query import QueryPlan
from saavn_artists.services.fanout_executor import FanOutExecutor
from saavn_artists.utils.errors import SaavnArtistsError
from saavn_artists.utils.logging import get_logger, search_log_context

_logger: structlog.BoundLogger = get_logger(__name__)


class PrefetchScheduler:
    """Schedules fire-and-forget next-page fetches.

    Parameters
    ----------
    cache:
        Shared result cache.
    executor:
        Used for its single-query path only; prefetch never fans out.
    is_in_flight:
        Returns ``True`` when a request is already fetching a key, so the
        prefetch would only duplicate it.
    enabled:
        Disable to make :meth:`schedule` a no-op.
    max_pending:
        Cap on concurrently pending prefetch tasks.
    """

    def __init__(
        self,
        cache: ICacheProvider,
        executor: FanOutExecutor,
        is_in_flight: Callable[[str], bool] | None = None,
        enabled: bool = True,
        max_pending: int = 32,
    ) -> None:
        self._cache = cache
        self._executor = executor
        self._is_in_flight = is_in_flight or (lambda _key: False)
        self._enabled = enabled
        self._max_pending = max_pending
        # Strong references keep detached tasks from being garbage collected.
        self._tasks: set[asyncio.Task[Any]] = set()
        self._pending_keys: set[str] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(
        self,
        plan: QueryPlan,
        total: int | None = None,
        returned: int | None = None,
    ) -> asyncio.Task[Any] | None:
        """Queue a warm-up of ``plan.page + 1``; return the task or ``None``.

        Skipped when disabled, when *total* shows the current page is the
        last one, when the key is already being prefetched or fetched, or
        when too many prefetches are pending.  A full page (*returned* at
        least the page size) always counts as having a successor, since a
        total derived from the artists seen cannot look past it.  The cache
        check itself runs inside the task so this method never awaits.
        """
        if not self._enabled:
            return None
        full_page = returned is not None and returned >= self._executor.page_size
        if total is not None and not full_page and plan.page * self._executor.page_size >= total:
            return None

        next_plan = plan.for_page(plan.page + 1)
        key = next_plan.cache_key
        if key in self._pending_keys or self._is_in_flight(key):
            return None
        if len(self._tasks) >= self._max_pending:
            _logger.debug("prefetch_skipped_backlog", key=key, pending=len(self._tasks))
            return None

        self._pending_keys.add(key)
        task = asyncio.get_running_loop().create_task(self._warm(next_plan, key))
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finish(t, key))
        return task

    async def shutdown(self) -> None:
        """Cancel pending prefetches and wait for them to unwind."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        _logger.info("prefetch_shutdown", cancelled=len(tasks))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _warm(self, plan: QueryPlan, key: str) -> None:
        try:
            with search_log_context(key, plan.language, plan.page, fanout=False):
                if await self._cache.exists(key) or self._is_in_flight(key):
                    _logger.debug("prefetch_not_needed")
                    return
                result = await self._executor.fetch_single(
                    plan.sub_queries[0], plan.language_context
                )
                await self._cache.set(key, result)
                _logger.debug("prefetch_stored", artists=len(result.artists))
        except asyncio.CancelledError:
            raise
        except SaavnArtistsError as exc:
            _logger.debug("prefetch_failed", key=key, error=str(exc))
        except Exception as exc:
            _logger.warning("prefetch_unexpected_error", key=key, error=str(exc))

    def _finish(self, task: asyncio.Task[Any], key: str) -> None:
        self._tasks.discard(task)
        self._pending_keys.discard(key)
