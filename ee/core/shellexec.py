"""EasyEngine Shell Functions"""
import re
import subprocess
from typing import Optional, Sequence, Union

from ee.core.logging import Log


class CommandExecutionError(Exception):
    """custom Exception for command execution"""
    pass


class EEShellExec:
    """Method to run shell commands.

    Strings run through the shell, sequences run without it.
    """
    def __init__(self):
        pass

    _SECRET_PATTERNS = [
        r'(--password=)(\S+)', r'(--pass=)(\S+)',
        r'(--token=)(\S+)', r'(--secret=)(\S+)',
        r'(passwd\s+-apr1\s+)(\S+)',
    ]

    @staticmethod
    def _redact(s: str) -> str:
        for pat in EEShellExec._SECRET_PATTERNS:
            s = re.sub(pat, r'\1***', s, flags=re.IGNORECASE)
        return s

    @staticmethod
    def _run(controller, command, errormsg, log, timeout, cwd):
        if log:
            shown = command if isinstance(command, str) else \
                " ".join(map(str, command))
            Log.debug(controller, "Running command: {0}".format(
                EEShellExec._redact(shown)))
        try:
            proc = subprocess.run(
                command,
                shell=isinstance(command, str),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=cwd,
                timeout=timeout,
            )
        except OSError as e:
            Log.debug(controller, str(e))
            raise CommandExecutionError(str(e))

        Log.debug(controller, "Command exited with {0}".format(proc.returncode))
        if proc.stderr.strip():
            Log.debug(controller, "Command Error: {0}".format(proc.stderr))
        if proc.returncode != 0 and errormsg:
            Log.error(controller, errormsg, exit=False)
        return proc

    @staticmethod
    def cmd_exec(
        controller,
        command: Union[str, Sequence[str]],
        errormsg: str = '',
        log: bool = True,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ) -> bool:
        """Run a command, True when it exits with status 0.

        A timeout counts as failure.
        """
        try:
            proc = EEShellExec._run(controller, command, errormsg, log,
                                    timeout, cwd)
        except subprocess.TimeoutExpired as e:
            Log.debug(controller, "Timeout: {0}".format(e))
            if errormsg:
                Log.error(controller, errormsg, exit=False)
            return False
        return proc.returncode == 0

    @staticmethod
    def cmd_exec_stdout(
        controller,
        command: Union[str, Sequence[str]],
        errormsg: str = '',
        log: bool = True,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ) -> str:
        """Run a command and return its stdout.

        A non-zero exit status still returns stdout; a timeout raises
        CommandExecutionError because there is no output to trust.
        """
        try:
            proc = EEShellExec._run(controller, command, errormsg, log,
                                    timeout, cwd)
        except subprocess.TimeoutExpired as e:
            Log.debug(controller, "Timeout: {0}".format(e))
            raise CommandExecutionError(str(e))
        return proc.stdout
