from __future__ import annotations

import asyncio
from typing import Any, Awaitable, List


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """
    Await every awaitable concurrently and return results in argument order.

    All-or-nothing: the first failure is re-raised after cancelling the
    siblings that are still pending.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
