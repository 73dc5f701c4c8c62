"""Run prompts through agent CLIs, streaming their output as it arrives."""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
import os
from dataclasses import dataclass
from typing import Protocol

from cliforge.agent.backend import CliBackend, CommandSpec

logger = logging.getLogger(__name__)

_EVENT_QUEUE_SIZE = 256
_LINE_LIMIT = 16 * 1024 * 1024


class TextWriter(Protocol):
    def write(self, text: str, /) -> object: ...

    def flush(self) -> object: ...


@dataclass
class ExecutionResult:
    """Outcome of one agent CLI run."""

    output: str
    stderr: str
    success: bool
    exit_code: int | None
    timed_out: bool


class _Stream(enum.Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


def _decode_line(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


async def _read_stream(
    stream: asyncio.StreamReader,
    queue: asyncio.Queue[tuple[_Stream, str | None]],
    kind: _Stream,
) -> None:
    """Put every line of ``stream`` on ``queue``, then ``None`` at end of file."""
    while raw := await stream.readline():
        await queue.put((kind, _decode_line(raw)))
    await queue.put((kind, None))


class CliExecutor:
    """Runs prompts through one :class:`CliBackend`."""

    def __init__(self, backend: CliBackend) -> None:
        self.backend = backend

    def __repr__(self) -> str:
        return f"CliExecutor(backend={self.backend!r})"

    async def execute(
        self,
        prompt: str,
        output_writer: TextWriter | None = None,
        timeout: float | None = None,
        verbose: bool = False,
    ) -> ExecutionResult:
        """Run ``prompt``, streaming stdout lines to ``output_writer``.

        If ``timeout`` seconds pass without a line on stdout or stderr, the
        process is terminated and the result is marked as timed out. With
        ``verbose``, stderr lines are written too, prefixed with ``[stderr]``.
        """
        with self.backend.build_command(prompt, False) as spec:
            process = await self._spawn(spec)

            if spec.stdin_input is not None and process.stdin is not None:
                process.stdin.write(spec.stdin_input.encode("utf-8"))
                await process.stdin.drain()
                process.stdin.close()
                await process.stdin.wait_closed()

            output, stderr, timed_out = await self._read_output(
                process, output_writer, timeout, verbose
            )
            returncode = await process.wait()

        exit_code = returncode if returncode >= 0 else None
        return ExecutionResult(
            output=output,
            stderr=stderr,
            success=returncode == 0 and not timed_out,
            exit_code=exit_code,
            timed_out=timed_out,
        )

    async def _spawn(self, spec: CommandSpec) -> asyncio.subprocess.Process:
        cwd = os.getcwd()
        env = dict(os.environ)
        env.update(self.backend.env_vars)
        logger.debug(
            "Spawning CLI command: command=%s args=%r cwd=%s", spec.command, spec.args, cwd
        )
        return await asyncio.create_subprocess_exec(
            spec.command,
            *spec.args,
            stdin=asyncio.subprocess.PIPE if spec.stdin_input is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=env,
            limit=_LINE_LIMIT,
        )

    async def _read_output(
        self,
        process: asyncio.subprocess.Process,
        output_writer: TextWriter | None,
        timeout: float | None,
        verbose: bool,
    ) -> tuple[str, str, bool]:
        queue: asyncio.Queue[tuple[_Stream, str | None]] = asyncio.Queue(_EVENT_QUEUE_SIZE)
        tasks = [
            asyncio.create_task(_read_stream(stream, queue, kind))
            for stream, kind in (
                (process.stdout, _Stream.STDOUT),
                (process.stderr, _Stream.STDERR),
            )
            if stream is not None
        ]
        pending = {task_kind for task_kind in (_Stream.STDOUT, _Stream.STDERR)}
        if process.stdout is None:
            pending.discard(_Stream.STDOUT)
        if process.stderr is None:
            pending.discard(_Stream.STDERR)

        output_lines: list[str] = []
        stderr_lines: list[str] = []
        timed_out = False

        if timeout is not None:
            logger.debug("Executing with inactivity timeout of %ss", timeout)

        try:
            while pending:
                if timeout is None:
                    kind, line = await queue.get()
                else:
                    try:
                        kind, line = await asyncio.wait_for(queue.get(), timeout)
                    except TimeoutError:
                        logger.warning(
                            "Execution inactivity timeout of %ss reached, terminating process",
                            timeout,
                        )
                        timed_out = True
                        self._terminate(process)
                        break

                if line is None:
                    pending.discard(kind)
                elif kind is _Stream.STDOUT:
                    if output_writer is not None:
                        output_writer.write(f"{line}\n")
                        output_writer.flush()
                    output_lines.append(f"{line}\n")
                else:
                    if verbose and output_writer is not None:
                        output_writer.write(f"[stderr] {line}\n")
                        output_writer.flush()
                    stderr_lines.append(f"{line}\n")
        finally:
            if timed_out or pending:
                for task in tasks:
                    task.cancel()
                for task in tasks:
                    with contextlib.suppress(asyncio.CancelledError):
                        await task
            else:
                await asyncio.gather(*tasks)

        return "".join(output_lines), "".join(stderr_lines), timed_out

    @staticmethod
    def _terminate(process: asyncio.subprocess.Process) -> None:
        """Ask the child to stop (SIGTERM on POSIX)."""
        logger.debug("Sending terminate signal to child process %s", process.pid)
        with contextlib.suppress(ProcessLookupError):
            process.terminate()

    async def execute_capture(self, prompt: str) -> ExecutionResult:
        """Run ``prompt`` without streaming and without a timeout."""
        return await self.execute_capture_with_timeout(prompt, None)

    async def execute_capture_with_timeout(
        self, prompt: str, timeout: float | None = None
    ) -> ExecutionResult:
        """Run ``prompt`` without streaming, with an optional inactivity timeout."""
        return await self.execute(prompt, None, timeout, False)