# =============================================================================
# core/process_runner.py  -  Run one external process, produce one outcome
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Launches an executable with an argument list, drains its stdout and
#   stderr while it runs, and turns whatever happens into exactly one
#   ExecutionOutcome:
#
#     could not start          ->  ProcessError(message)
#     exited with code 0       ->  Success(stdout)
#     exited with any other    ->  NonZeroExit(code, stdout, stderr)
#     ran past the time limit  ->  killed, then NonZeroExit(code, ...)
#
# RESOURCE RULES:
#   Each call owns exactly one child process.  Before run_process() returns
#   (or propagates a cancellation) the child has been reaped and both
#   stream readers have finished or been cancelled.  Nothing is shared
#   between calls, so concurrent calls need no locking.
#
# The process is started with asyncio.create_subprocess_exec(): an argument
# array, never a shell string, so the prompt is passed verbatim.
# =============================================================================

import asyncio
import logging
from typing import Optional, Sequence

from core.models import ExecutionOutcome, NonZeroExit, ProcessError, Success

logger = logging.getLogger(__name__)

_READ_CHUNK_SIZE = 64 * 1024

# After a kill, how long the readers get to hit EOF.  A grandchild that
# inherited the pipes can keep them open past the kill.
_DRAIN_GRACE_SECONDS = 2.0


async def _drain(stream: Optional[asyncio.StreamReader], chunks: list[bytes]) -> None:
    """Append everything read from `stream` to `chunks`, in arrival order, until EOF."""
    if stream is None:
        return
    while True:
        chunk = await stream.read(_READ_CHUNK_SIZE)
        if not chunk:
            return
        chunks.append(chunk)


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


async def _finish_readers(readers: list["asyncio.Task[None]"], grace: float) -> None:
    """Wait for the reader tasks, cancelling any still running after `grace` seconds."""
    _, pending = await asyncio.wait(readers, timeout=grace)
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_process(executable: str, args: Sequence[str], timeout: float) -> ExecutionOutcome:
    """Run `executable` with `args` and resolve to a single ExecutionOutcome.

    Args:
        executable: Program name (resolved via PATH) or path.
        args: Arguments, passed as-is without a shell.
        timeout: Maximum run time in seconds.  On expiry the process is
            killed and the outcome is a NonZeroExit.

    Returns:
        Success, ProcessError or NonZeroExit.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.warning("Could not start %s: %s", executable, e)
        return ProcessError(message=str(e))

    stdout_chunks: list[bytes] = []
    stderr_chunks: list[bytes] = []
    readers = [
        asyncio.ensure_future(_drain(process.stdout, stdout_chunks)),
        asyncio.ensure_future(_drain(process.stderr, stderr_chunks)),
    ]

    # The run is over once the process has exited AND both pipes hit EOF.
    waiter = asyncio.ensure_future(process.wait())
    timed_out = False
    try:
        _, pending = await asyncio.wait([waiter, *readers], timeout=timeout)
        if pending:
            timed_out = True
            logger.warning("%s exceeded %ss, killing pid %s", executable, timeout, process.pid)
            await _kill(process)
            await _finish_readers(readers, _DRAIN_GRACE_SECONDS)
    finally:
        # Reached with a live child only when the awaiting task was cancelled.
        if process.returncode is None:
            await _kill(process)
        for task in (waiter, *readers):
            if not task.done():
                task.cancel()

    code = process.returncode
    stdout = _decode(stdout_chunks)
    if code == 0 and not timed_out:
        return Success(stdout=stdout)
    return NonZeroExit(code=code if code else -1, stdout=stdout, stderr=_decode(stderr_chunks))
