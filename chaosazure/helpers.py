import asyncio
from logzero import logger

def run(callable, timeout: int, *args, **kwargs):
    """
    Run an async function to completion on a fresh asyncio event loop

    :param callable: An async function pointer
    :type callable: Callable[..., Awaitable]
    :param timeout: Number of seconds the async function is allowed to execute
        before timing out. None waits forever.
    :type timeout: int
    :param *args: Expanded list of arguments to pass to the async function
    :type *args: Any
    :param **kwargs: Expanded keyword arguments to pass to the async function
    :type **kwargs: Any
    :return: Whatever the async function returns
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(
            asyncio.wait_for(callable(*args, **kwargs), timeout=timeout))
    except asyncio.TimeoutError:
        logger.error("Call to %s timed out!!!", callable)
        raise
    finally:
        loop.close()


async def bounded(awaitable, timeout: int, description: str):
    """
    Await awaitable for at most timeout seconds.

    :param awaitable: The coroutine or future to wait on.
    :param timeout: Number of seconds to wait. None waits forever.
    :type timeout: int
    :param description: What is being waited on, for the log.
    :type description: str
    :return: The result of awaitable
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("%s timed out after %s seconds!!!", description, timeout)
        raise
