"""Asynchronous external process execution."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Set

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096


@dataclass
class ProcessResult:
    """Outcome of a finished process."""

    returncode: int
    stdout: str


class ProcessRunner:
    """Runs commands on the current event loop and reports their output.

    Exit status is kept on the :class:`ProcessResult` but completion
    callbacks only receive the output text; callers decide what a failed
    run means from the text alone.
    """

    def __init__(self):
        self.pending: Set[asyncio.Task] = set()

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: str,
        on_complete: Callable[[str], None],
    ) -> Optional[asyncio.Task]:
        """Start ``command`` in ``cwd`` and call ``on_complete`` after it exits."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop, not starting {command}")
            return None

        task = loop.create_task(self._execute(command, list(args), cwd, on_complete))
        self.pending.add(task)
        task.add_done_callback(lambda t: self.pending.discard(t))
        return task

    async def _execute(
        self,
        command: str,
        args: List[str],
        cwd: str,
        on_complete: Callable[[str], None],
    ) -> Optional[ProcessResult]:
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug(f"Failed to start {command} in {cwd}: {e}")
            return None

        chunks: List[bytes] = []
        try:
            while True:
                chunk = await process.stdout.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
            returncode = await process.wait()
        except asyncio.CancelledError:
            if process.returncode is None:
                logger.debug(f"Killing {command} in {cwd}")
                process.kill()
                await process.wait()
            raise

        result = ProcessResult(
            returncode=returncode,
            stdout=b"".join(chunks).decode("utf-8", errors="replace"),
        )
        if returncode != 0:
            logger.debug(f"{command} exited with status {returncode} in {cwd}")

        try:
            on_complete(result.stdout)
        except Exception as e:
            logger.warning(f"Completion handler for {command} failed: {e}")
            logger.debug(f"Exception details: {e}", exc_info=True)

        return result

    async def drain(self):
        """Wait until every started process has exited and been reported."""
        while self.pending:
            await asyncio.gather(*list(self.pending), return_exceptions=True)
            self.pending = {task for task in self.pending if not task.done()}
