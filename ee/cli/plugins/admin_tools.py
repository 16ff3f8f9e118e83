"""admin-tools command for EasyEngine

Mounts the shared admin-tools directory into a site's nginx and php
containers through a docker-compose overlay, and removes it again.
"""
import os

from cement.core.controller import CementBaseController, expose
from sqlalchemy.exc import SQLAlchemyError

from ee.cli.plugins.admin_tools_functions import (AdminToolsConfig,
                                                  AdminToolsError,
                                                  AdminToolsInstaller)
from ee.cli.plugins.sitedb import auto_site_name, getSiteInfo
from ee.core.auth import EEAuth
from ee.core.docker import EEDocker
from ee.core.exc import EEError
from ee.core.lock import EELock
from ee.core.logging import Log
from ee.core.shellexec import CommandExecutionError
from ee.core.template import EETemplate
from ee.core.variables import EEVar


class SiteNotFoundError(AdminToolsError):
    pass


class AlreadyEnabledError(AdminToolsError):
    pass


class AlreadyDisabledError(AdminToolsError):
    pass


class UnsupportedSiteTypeError(AdminToolsError):
    pass


class AuthInitError(AdminToolsError):
    pass


class ComposeApplyError(AdminToolsError):
    pass


class SitePersistError(AdminToolsError):
    """The containers were updated but the site record was not saved"""
    pass


def ee_admin_tools_hook(app):
    from ee.core.database import init_db
    db_path = (AdminToolsConfig.app_values(app).get('db_path') or
               EEVar.ee_db_path)
    init_db(app, 'sqlite:///{0}'.format(db_path))


class AdminToolsToggle:
    """Enable or disable admin-tools on a site.

    The site's admin_tools flag is only changed after docker-compose
    applied (or dropped) the overlay. A failure to save the flag after
    that point leaves containers and record out of sync; it is reported
    as SitePersistError and repaired by reconcile() on the next run.
    """

    ENABLED = 'enabled'
    DISABLED = 'disabled'

    def __init__(self, controller, config, installer=None):
        self.controller = controller
        self.config = config
        self.installer = installer or AdminToolsInstaller(controller, config)

    def state(self, site):
        return self.ENABLED if site.admin_tools else self.DISABLED

    def find_site(self, site_name):
        site = getSiteInfo(self.controller, site_name)
        if not site or not site.site_enabled:
            raise SiteNotFoundError(
                'Site {0} does not exist / is not enabled.'.format(site_name))
        return site

    def overlay_path(self, site):
        return os.path.join(site.site_fs_path, EEVar.ee_compose_admin_file)

    def reconcile(self, site):
        """Align the stored flag with the running nginx container"""
        mounts = EEDocker.service_mounts(self.controller, site.site_fs_path,
                                         'nginx')
        if mounts is None:
            Log.debug(self.controller, 'Unable to probe admin-tools state '
                      'of {0}, keeping stored flag'.format(site.site_url))
            return False
        applied = self.config.admin_path in mounts
        if applied == bool(site.admin_tools):
            return False
        Log.warn(self.controller,
                 'admin-tools are {0} on the containers of {1} but recorded '
                 'as {2}, updating site record.'.format(
                     self.ENABLED if applied else self.DISABLED,
                     site.site_url, self.state(site)))
        site.admin_tools = applied
        self.persist(site)
        return True

    def check_services(self, site):
        try:
            services = EEDocker.compose_services(
                self.controller, site.site_fs_path,
                timeout=self.config.compose_timeout)
        except CommandExecutionError as e:
            Log.debug(self.controller, str(e))
            raise ComposeApplyError(
                'Unable to read docker-compose services of {0}.'
                .format(site.site_url))
        missing = [service for service in EEVar.ee_admin_min_services
                   if service not in services]
        if missing:
            raise UnsupportedSiteTypeError(
                '{0} site-type of {1}-command does not support admin-tools.'
                .format(site.app_sub_type, site.site_type))

    def render_overlay(self, site):
        data = {
            'ee_root_dir': EEVar.ee_root_dir,
            'admin_tools_dir': self.config.root_dir,
            'db_path': self.config.db_path,
            'ee_admin_path': self.config.admin_path,
        }
        overlay = self.overlay_path(site)
        EETemplate.deploy(self.controller, overlay,
                          'docker-compose-admin.mustache', data,
                          template_dir=self.config.template_dir)
        return overlay

    def apply(self, site, services, compose_files, errormsg):
        try:
            applied = EEDocker.compose_up(
                self.controller, site.site_fs_path, services,
                compose_files=compose_files,
                timeout=self.config.compose_timeout)
        except CommandExecutionError as e:
            Log.debug(self.controller, str(e))
            applied = False
        if not applied:
            raise ComposeApplyError(errormsg.format(site.site_url))

    def init_auth(self):
        try:
            EEAuth.init_global_admin_tools_auth(self.controller,
                                                self.config.auth_dir)
        except (CommandExecutionError, OSError) as e:
            Log.debug(self.controller, str(e))
            raise AuthInitError(
                'Unable to create global auth for admin-tools in {0}.'
                .format(self.config.auth_dir))

    def remove_overlay(self, site):
        """Drop the overlay once the containers run without it"""
        overlay = self.overlay_path(site)
        try:
            os.remove(overlay)
        except FileNotFoundError:
            pass
        except OSError as e:
            Log.debug(self.controller, str(e))
            Log.warn(self.controller,
                     'Unable to remove {0}, remove it before running '
                     'docker-compose by hand.'.format(overlay))

    def persist(self, site):
        try:
            site.save()
        except SQLAlchemyError as e:
            Log.debug(self.controller, str(e))
            Log.warn(self.controller,
                     'admin-tools containers of {0} are {1} but the site '
                     'record could not be saved. The next enable/disable '
                     'run will reconcile it.'.format(site.site_url,
                                                     self.state(site)))
            raise SitePersistError(
                'Unable to save admin-tools state of {0}.'
                .format(site.site_url))

    def enable(self, site_name, force=False):
        with EELock(self.controller, self.config.site_lock_path(site_name)):
            return self._enable(site_name, force)

    def _enable(self, site_name, force):
        site = self.find_site(site_name)
        self.reconcile(site)
        if site.admin_tools and not force:
            raise AlreadyEnabledError(
                'admin-tools already seem to be enabled for {0}'
                .format(site.site_url))

        self.check_services(site)
        self.init_auth()
        self.installer.install()

        overlay = self.render_overlay(site)
        self.apply(site, ['nginx'],
                   [EEVar.ee_compose_file, os.path.basename(overlay)],
                   'Error in enabling admin-tools for {0} site. Check logs.')
        site.admin_tools = True
        self.persist(site)
        Log.success(self.controller, 'admin-tools enabled for {0} site.'
                    .format(site.site_url))
        return site

    def disable(self, site_name, force=False):
        with EELock(self.controller, self.config.site_lock_path(site_name)):
            return self._disable(site_name, force)

    def _disable(self, site_name, force):
        site = self.find_site(site_name)
        self.reconcile(site)
        if not site.admin_tools and not force:
            raise AlreadyDisabledError(
                'admin-tools already seem to be disabled for {0}'
                .format(site.site_url))

        self.apply(site, list(EEVar.ee_admin_min_services), None,
                   'Error in disabling admin-tools for {0} site. Check logs.')
        self.remove_overlay(site)
        site.admin_tools = False
        self.persist(site)
        Log.success(self.controller, 'admin-tools disabled for {0} site.'
                    .format(site.site_url))
        return site


class EEAdminToolsController(CementBaseController):
    class Meta:
        label = 'admin-tools'
        stacked_on = 'base'
        stacked_type = 'nested'
        description = 'Manages admin-tools on a site.'
        arguments = [
            (['site_name'],
                dict(help='Name of website to enable/disable admin-tools on.',
                     nargs='?')),
            (['--force'],
                dict(help='Force enabling/disabling of admin-tools '
                     'for a site.', action='store_true')),
        ]
        usage = 'ee admin-tools (enable | disable) [<site-name>] [--force]'

    @expose(hide=True)
    def default(self):
        self.app.args.print_help()

    def _site_name(self):
        site_name = auto_site_name(self, self.app.pargs.site_name)
        if not site_name:
            Log.error(self, 'Could not find the site you wish to run '
                      'admin-tools command on. Either pass it as an '
                      'argument or run it from inside a site folder.')
        return site_name

    def _toggle(self, action, operation):
        Log.debug(self, 'admin-tools {0} start'.format(action))
        site_name = self._site_name()
        if not site_name:
            return
        try:
            toggle = AdminToolsToggle(self,
                                      AdminToolsConfig.from_app(self.app))
            operation(toggle, site_name, force=self.app.pargs.force)
        except EEError as e:
            Log.error(self, str(e))
            return
        Log.debug(self, 'admin-tools {0} stop'.format(action))

    @expose(help='Enables admin-tools on site.')
    def enable(self):
        self._toggle('enable', AdminToolsToggle.enable)

    @expose(help='Disables admin-tools on site.')
    def disable(self):
        self._toggle('disable', AdminToolsToggle.disable)


def load(app):
    app.handler.register(EEAdminToolsController)
    app.hook.register('post_setup', ee_admin_tools_hook)
