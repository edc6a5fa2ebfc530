"""Run JMeter as a subprocess."""

import asyncio
import logging

from jmeter_engine.command import Command

log = logging.getLogger(__name__)


async def run_process(command: Command) -> int:
    """Run the command and wait for it to exit.

    JMeter is started directly, without a shell, so argument values are
    never expanded. It reports results through its log file, so the standard
    streams are discarded. There is no timeout: a hung JMeter blocks the run.

    Returns:
        Exit code of the process

    Raises:
        OSError: If the executable cannot be started

    """
    process = await asyncio.create_subprocess_exec(
        *command.argv,
        cwd=command.working_directory,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )
    returncode = await process.wait()
    log.debug("JMeter exited with code %s", returncode)
    return returncode
