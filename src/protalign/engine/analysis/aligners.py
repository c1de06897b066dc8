import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from typing import Any, Set, Union
from queue import Queue

from protalign.engine.analysis.local import local_alignment
from protalign.engine.structures.alignment import PairwiseAlignment
from protalign.engine.structures.penalty import PenaltyTable


class AsyncLocalAlignmentEngine(AbstractContextManager):
    def __enter__(self):
        self._thread_pool = ThreadPoolExecutor(self._max_threads, thread_name_prefix="async-local-alignment")
        return self

    def __init__(self, table: PenaltyTable, max_threads: int = 4):
        self._max_threads = max_threads
        self._table = table
        self._work_left: Set[Future] = set()
        self._work_complete: Queue[Future] = Queue()

    def align(self, first: str, second: str, **associated_data):
        work = self._thread_pool.submit(
            self.work, first, second, **associated_data)
        self._work_left.add(work)
        work.add_done_callback(self._on_complete)

    def _on_complete(self, future: Future):
        # Queued before removal so the engine never looks idle in between.
        self._work_complete.put(future)
        self._work_left.discard(future)

    def work(self, first: str, second: str, **associated_data) -> tuple[PairwiseAlignment, dict[str, Any]]:
        return local_alignment(first, second, self._table), associated_data

    async def next_completed(self) -> Union[tuple[PairwiseAlignment, dict[str, Any]], None]:
        if self._work_complete.empty() and not len(self._work_left):
            return None
        future_now = await asyncio.to_thread(self._work_complete.get)
        return await asyncio.wrap_future(future_now)

    def __exit__(self, exc_type, exc_value, traceback):
        self.shutdown()

    def __aiter__(self):
        return self

    async def __anext__(self):
        result = await self.next_completed()
        if result is None:
            raise StopAsyncIteration
        return result

    def shutdown(self):
        self._thread_pool.shutdown(wait=True, cancel_futures=True)
