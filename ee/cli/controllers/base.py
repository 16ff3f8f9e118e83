"""EasyEngine base controller."""

from cement.core.controller import CementBaseController, expose

from ee.core.variables import EEVar

VERSION = EEVar.ee_version

BANNER = """
EasyEngine v%s
Copyright (c) 2024 EasyEngine.
""" % VERSION


class EEBaseController(CementBaseController):
    class Meta:
        label = 'base'
        description = ("EasyEngine manages docker based websites "
                       "and the services around them")
        arguments = [
            (['-v', '--version'], dict(action='version', version=BANNER)),
        ]

    @expose(hide=True)
    def default(self):
        self.app.args.print_help()
