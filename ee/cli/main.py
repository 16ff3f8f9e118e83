"""EasyEngine main application entry point."""
import sys

from cement.core.exc import CaughtSignal, FrameworkError
from cement.core.foundation import CementApp
from cement.ext.ext_argparse import ArgParseArgumentHandler
from cement.utils.misc import init_defaults

from ee.core import exc
from ee.core.variables import EEVar

# Application default.  Should update config/ee.conf to reflect any
# changes, or additions here.
defaults = init_defaults('ee', 'log.colorlog')

# All internal/external plugin configurations are loaded from here
defaults['ee']['plugin_config_dir'] = '{0}/plugins.d'.format(
    EEVar.ee_config_dir)

# External plugins (generally, do not ship with application code)
defaults['ee']['plugin_dir'] = '/var/lib/ee/plugins'

# External templates (generally, do not ship with application code)
defaults['ee']['template_dir'] = '/var/lib/ee/templates'

defaults['log.colorlog']['level'] = 'INFO'
defaults['log.colorlog']['file'] = EEVar.ee_log_file


class EEArgHandler(ArgParseArgumentHandler):
    class Meta:
        label = 'ee_args_handler'

    def error(self, message):
        super(EEArgHandler, self).error("unknown args")


class EEApp(CementApp):
    class Meta:
        label = 'ee'

        config_defaults = defaults

        # All built-in application bootstrapping (always run)
        bootstrap = 'ee.cli.bootstrap'

        # Internal plugins (ship with application code)
        plugin_bootstrap = 'ee.cli.plugins'

        # Internal templates (ship with application code)
        template_module = 'ee.cli.templates'

        config_files = [EEVar.ee_config_file]

        extensions = ['colorlog']
        log_handler = 'colorlog'

        arg_handler = EEArgHandler

        exit_on_close = True


def get_test_defaults():
    test_defaults = init_defaults('ee', 'log.colorlog')
    test_defaults['ee']['plugin_config_dir'] = '/nonexistent/plugins.d'
    test_defaults['log.colorlog']['file'] = None
    test_defaults['log.colorlog']['level'] = 'DEBUG'
    return test_defaults


class EETestApp(EEApp):
    """A test app that is better suited for testing."""
    class Meta:
        # default argv to empty (don't use sys.argv)
        argv = []

        # don't look for config files (could break tests)
        config_files = []

        config_defaults = get_test_defaults()

        # don't call sys.exit() when app.close() is called in tests
        exit_on_close = False


def main():
    with EEApp() as app:
        try:
            app.run()
        except exc.EEError as e:
            # Catch our application errors and exit 1 (error)
            print(e, file=sys.stderr)
            app.exit_code = 1
        except FrameworkError as e:
            # Catch framework errors and exit 1 (error)
            print('FrameworkError > %s' % e, file=sys.stderr)
            app.exit_code = 1
            if app.debug:
                import traceback
                traceback.print_exc()
        except CaughtSignal as e:
            # Default Cement signals are SIGINT and SIGTERM, exit 0 (non-error)
            print('CaughtSignal > %s' % e)
            app.exit_code = 0


if __name__ == '__main__':
    main()
