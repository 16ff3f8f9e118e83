"""EasyEngine HTTP authentication for admin-tools"""
import os

from ee.core.exc import EEError
from ee.core.fileutils import EEFileUtils
from ee.core.logging import Log
from ee.core.random import RANDOM
from ee.core.shellexec import EEShellExec
from ee.core.variables import EEVar


class EEAuth:
    """Global basic auth protecting admin-tools on every site"""

    def __init__(self):
        pass

    def htpasswd_path(self, auth_dir=None):
        return os.path.join(auth_dir or EEVar.ee_admin_auth_dir,
                            'default_admin_tools')

    def init_global_admin_tools_auth(self, auth_dir=None, display=True):
        """Create global admin-tools credentials when none exist.

        Returns True when new credentials were generated.
        """
        htpasswd = EEAuth.htpasswd_path(self, auth_dir)
        if os.path.isfile(htpasswd):
            Log.debug(self, 'Global admin-tools auth already present')
            return False

        username = EEVar.ee_admin_auth_user
        password = RANDOM.long(self)
        hashed = EEShellExec.cmd_exec_stdout(
            self, ['openssl', 'passwd', '-apr1', password],
            errormsg='Failed to generate HTTP authentication hash.',
            log=False).strip()
        if not hashed:
            raise EEError('Failed to generate HTTP authentication hash.')

        EEFileUtils.dumpfile(self, htpasswd,
                             '{0}:{1}\n'.format(username, hashed))
        os.chmod(htpasswd, 0o640)
        if display:
            Log.info(self, 'Global auth for admin-tools created.')
            Log.info(self, 'User: {0}'.format(username), log=False)
            Log.info(self, 'Pass: {0}'.format(password), log=False)
        return True
