import os
import tempfile
from unittest import TestCase, mock

from ee.cli.main import EETestApp
from ee.cli.plugins import admin_tools
from ee.cli.plugins.admin_tools_functions import AdminToolsConfig
from ee.core import shellexec


class CliTestCaseAdminTools(TestCase):

    def test_enable_passes_site_and_force(self):
        with mock.patch.object(admin_tools.AdminToolsToggle,
                               'enable') as mock_enable:
            with EETestApp(argv=['admin-tools', 'enable', 'example.com/',
                                 '--force']) as app:
                admin_tools.load(app)
                app.run()

        self.assertEqual(mock_enable.call_count, 1)
        toggle, site_name = mock_enable.call_args[0]
        self.assertIsInstance(toggle, admin_tools.AdminToolsToggle)
        self.assertEqual(site_name, 'example.com')
        self.assertEqual(mock_enable.call_args[1], {'force': True})

    def test_disable_without_force(self):
        with mock.patch.object(admin_tools.AdminToolsToggle,
                               'disable') as mock_disable:
            with EETestApp(argv=['admin-tools', 'disable',
                                 'example.com']) as app:
                admin_tools.load(app)
                app.run()

        self.assertEqual(mock_disable.call_args[0][1], 'example.com')
        self.assertEqual(mock_disable.call_args[1], {'force': False})

    def test_error_is_reported(self):
        error = admin_tools.AlreadyEnabledError(
            'admin-tools already seem to be enabled for example.com')
        with mock.patch.object(admin_tools.AdminToolsToggle, 'enable',
                               side_effect=error), \
                mock.patch.object(admin_tools.Log, 'error') as mock_error:
            with EETestApp(argv=['admin-tools', 'enable',
                                 'example.com']) as app:
                admin_tools.load(app)
                app.run()

        mock_error.assert_called_once_with(
            mock.ANY, 'admin-tools already seem to be enabled for example.com')

    def test_error_closes_app_with_status_1(self):
        error = admin_tools.SiteNotFoundError(
            'Site example.com does not exist / is not enabled.')
        with mock.patch.object(admin_tools.AdminToolsToggle, 'disable',
                               side_effect=error):
            with EETestApp(argv=['admin-tools', 'disable',
                                 'example.com']) as app:
                admin_tools.load(app)
                app.run()
                self.assertEqual(app.exit_code, 1)

    def test_site_name_from_working_directory(self):
        with mock.patch.object(admin_tools, 'auto_site_name',
                               return_value='example.com') as mock_auto, \
                mock.patch.object(admin_tools.AdminToolsToggle,
                                  'enable') as mock_enable:
            with EETestApp(argv=['admin-tools', 'enable']) as app:
                admin_tools.load(app)
                app.run()

        self.assertIsNone(mock_auto.call_args[0][1])
        self.assertEqual(mock_enable.call_args[0][1], 'example.com')

    def test_config_from_app(self):
        with EETestApp(argv=[]) as app:
            app.config.add_section('admin-tools')
            app.config.set('admin-tools', 'root_dir', '/srv/admin-tools')
            app.config.set('admin-tools', 'compose_timeout', '30')
            app.config.set('admin-tools', 'unknown', 'ignored')
            config = AdminToolsConfig.from_app(app)

        self.assertEqual(config.root_dir, '/srv/admin-tools')
        self.assertEqual(config.compose_timeout, 30)
        self.assertEqual(config.admin_path, '/var/www/htdocs/ee-admin')
        self.assertEqual(config.install_lock_path,
                         '/run/ee-admin-tools-install.lock')

    def test_invalid_timeout_is_reported(self):
        with mock.patch.object(admin_tools.AdminToolsToggle,
                               'enable') as mock_enable, \
                mock.patch.object(admin_tools.Log, 'error') as mock_error:
            with EETestApp(argv=['admin-tools', 'enable',
                                 'example.com']) as app:
                app.config.add_section('admin-tools')
                app.config.set('admin-tools', 'compose_timeout', 'soon')
                admin_tools.load(app)
                app.run()

        mock_enable.assert_not_called()
        mock_error.assert_called_once_with(
            mock.ANY, 'Invalid compose_timeout in [admin-tools]: soon')

    def test_auth_failure_is_reported(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            config = AdminToolsConfig(auth_dir=os.path.join(tmp_dir, 'auth'),
                                      lock_dir=os.path.join(tmp_dir, 'run'))
            site = mock.Mock(site_url='example.com', admin_tools=False)
            with mock.patch.object(admin_tools.AdminToolsConfig, 'from_app',
                                   return_value=config), \
                    mock.patch.object(admin_tools.AdminToolsToggle,
                                      'find_site', return_value=site), \
                    mock.patch.object(admin_tools.AdminToolsToggle,
                                      'reconcile'), \
                    mock.patch.object(admin_tools.AdminToolsToggle,
                                      'check_services'), \
                    mock.patch.object(shellexec.subprocess, 'run',
                                      side_effect=FileNotFoundError(
                                          'openssl')):
                with EETestApp(argv=['admin-tools', 'enable',
                                     'example.com']) as app:
                    admin_tools.load(app)
                    app.run()
                    self.assertEqual(app.exit_code, 1)
            self.assertFalse(os.path.exists(
                os.path.join(tmp_dir, 'auth', 'default_admin_tools')))
