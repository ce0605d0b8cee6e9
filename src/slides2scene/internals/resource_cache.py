"""Per-run cache of decompressed package parts.

One PartCache is created for each render pipeline selection and handed to every stage, so a
later stage (e.g. the image gallery after the combined layout failed) reuses what an earlier
stage already inflated instead of decompressing it again.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

log = logging.getLogger("slides2scene")


# region PartCache
class PartCache:
    """
    Cache keyed by resource identity with at-most-one-in-flight load per key.

    Concurrent callers asking for the same key while it is loading all await the same task.
    A failed load is not cached: the exception goes to every waiter and the next call retries.
    """

    def __init__(self) -> None:
        self._loaded: dict[str, bytes] = {}
        self._loading: dict[str, asyncio.Task[bytes]] = {}
        self.load_count = 0  # How many loader calls actually ran

    def __contains__(self, key: str) -> bool:
        return key in self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    @property
    def pending_count(self) -> int:
        return len(self._loading)

    # region get
    async def get(self, key: str, loader: Callable[[], bytes]) -> bytes:
        """
        Return the cached value for key, loading it in a worker thread if needed.

        Args:
            key: Resource identity, normally the part path.
            loader: Blocking callable that produces the bytes.
        """
        if key in self._loaded:
            return self._loaded[key]

        task = self._loading.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader))
            self._loading[key] = task

        return await task

    # endregion

    async def _load(self, key: str, loader: Callable[[], bytes]) -> bytes:
        self.load_count += 1
        this_task = asyncio.current_task()
        try:
            value = await asyncio.to_thread(loader)
        finally:
            # Whether it worked or not, this key is no longer in flight, unless a newer load
            # already took its place after discard_pending().
            if self._loading.get(key) is this_task:
                del self._loading[key]
        self._loaded[key] = value
        log.debug(f"Cached part {key} ({len(value)} bytes)")
        return value

    def discard_pending(self) -> None:
        """
        Cancel and forget every load still in flight.

        Loads read through the archive of the stage that started them. Once that stage is over
        its archive is closed, so a later stage must start its own load instead of awaiting one
        that can only fail.
        """
        for key, task in list(self._loading.items()):
            task.cancel()
            log.debug(f"Discarded in-flight load of {key}")
        self._loading.clear()

    def clear(self) -> None:
        self._loaded.clear()


# endregion
