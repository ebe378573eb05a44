#!/usr/bin/env python3
"""
Future.any Demo

Three futures rejected by loop timers after 1, 2 and 3 seconds. Since none
fulfills, any() rejects with an AggregateError holding every reason.
"""

import asyncio
import logging

from microfuture import Future, Reactor, configure_logging

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def reject_after(loop, delay, reason):
    return Future(lambda resolve, reject: loop.call_later(delay, reject, reason))


async def main():
    configure_logging()
    Reactor.use_asyncio()
    loop = asyncio.get_running_loop()

    futures = [reject_after(loop, 1, 111), reject_after(loop, 2, 222), reject_after(loop, 3, 333)]

    done = asyncio.Event()
    (Future.any(futures)
        .then(lambda value: logger.info(f"value: {value}"))
        .catch(lambda err: logger.info(f"errors: {err.errors}"))
        .finally_(lambda _: done.set()))

    await done.wait()


if __name__ == "__main__":
    asyncio.run(main())
