"""EasyEngine docker compose functions"""
import os

from ee.core.logging import Log
from ee.core.shellexec import CommandExecutionError, EEShellExec
from ee.core.variables import EEVar


class EEDocker:
    """docker-compose helpers operating on a site working directory"""

    def __init__(self):
        pass

    @staticmethod
    def _compose(files=None):
        cmd = list(EEVar.ee_compose_cmd)
        for compose_file in files or []:
            cmd += ['-f', compose_file]
        return cmd

    def compose_services(self, working_dir, timeout=None):
        """List services declared by the site's base composition"""
        cmd = EEDocker._compose() + ['config', '--services']
        output = EEShellExec.cmd_exec_stdout(self, cmd, cwd=working_dir,
                                             timeout=timeout)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def compose_up(self, working_dir, services, compose_files=None,
                   timeout=None):
        """(Re)start services with the given composition documents.

        Returns False when docker-compose fails or exceeds the timeout.
        """
        if timeout is None:
            timeout = EEVar.ee_compose_timeout
        cmd = (EEDocker._compose(compose_files) + ['up', '-d'] +
               list(services))
        Log.debug(self, "Starting {0} in {1}".format(
            ', '.join(services), working_dir))
        return EEShellExec.cmd_exec(self, cmd, cwd=working_dir,
                                    timeout=timeout)

    def service_mounts(self, working_dir, service, timeout=60):
        """Mount destinations of a running service container.

        Returns None when the state cannot be determined.
        """
        if not os.path.isdir(working_dir):
            return None
        try:
            container = EEShellExec.cmd_exec_stdout(
                self, EEDocker._compose() + ['ps', '-q', service],
                cwd=working_dir, timeout=timeout).strip()
            if not container:
                return None
            output = EEShellExec.cmd_exec_stdout(
                self, ['docker', 'inspect', '-f',
                       '{{range .Mounts}}{{println .Destination}}{{end}}',
                       container.splitlines()[0]], timeout=timeout)
        except CommandExecutionError as e:
            Log.debug(self, "Unable to inspect {0}: {1}".format(service, e))
            return None
        return [line.strip() for line in output.splitlines() if line.strip()]
