import os
from unittest import mock

from ee.core import auth
from ee.core.auth import EEAuth


def test_creates_global_credentials_once(tmp_path):
    controller = mock.Mock()
    with mock.patch.object(auth.EEShellExec, 'cmd_exec_stdout',
                           return_value='$apr1$hash\n') as mock_exec:
        assert EEAuth.init_global_admin_tools_auth(controller, str(tmp_path))
        assert not EEAuth.init_global_admin_tools_auth(controller,
                                                       str(tmp_path))

    htpasswd = tmp_path / 'default_admin_tools'
    assert htpasswd.read_text() == 'easyengine:$apr1$hash\n'
    assert oct(os.stat(str(htpasswd)).st_mode & 0o777) == oct(0o640)
    assert mock_exec.call_count == 1
    command = mock_exec.call_args[0][1]
    assert command[:3] == ['openssl', 'passwd', '-apr1']
    assert len(command[3]) == 24
    assert mock_exec.call_args[1]['log'] is False
