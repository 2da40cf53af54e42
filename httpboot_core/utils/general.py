import logging
import shlex
import shutil
import subprocess
from typing import Optional, Union

from httpboot_core.models.command_result import CommandResult
from httpboot_core.models.runcommand_error import RunCommandError, RunCommandTimeout

log = logging.getLogger(__name__)


def run_command(
    cmd: Union[list, str],
    raise_on_fail=True,
    timeout: Optional[int] = None,
) -> CommandResult:
    """Run a single CLI command with subprocess and returns the output

    Args:
        cmd: The command to be executed. A string is split with shlex; it is
             never handed to a shell.
        raise_on_fail: Whether to raise an error if the command fails or not. Default is True.
        timeout: The number of seconds after which the command should time out.

    Returns:
        A CommandResult object containing the output of the command.

    Raises:
        RunCommandError: If `raise_on_fail=True` and the command failed.
        RunCommandTimeout: If `raise_on_fail=True` and the command timed out.
    """
    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    log.debug("Running command: %s", shlex.join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        err_msg = f"Command {cmd} timed out after {timeout} seconds"
        log.debug(err_msg)
        if raise_on_fail:
            raise RunCommandTimeout(err_msg)
        return CommandResult("", err_msg, -1)
    except FileNotFoundError as err:
        if raise_on_fail:
            raise RunCommandError(str(err), 127)
        return CommandResult("", str(err), 127)

    if raise_on_fail and proc.returncode != 0:
        raise RunCommandError(proc.stderr.decode(), proc.returncode)
    return CommandResult(proc.stdout.decode(), proc.stderr.decode(), proc.returncode)


def command_exists(name: str) -> bool:
    """Whether an executable named `name` is on the PATH"""
    return shutil.which(name) is not None
