"""EasyEngine log module"""
import sys


class Log:
    """
        Logs messages with colors for different messages
        according to functions
    """
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

    def error(self, msg, exit=True):
        """
        Logs error into log file and stderr, closes the app when exit is set
        """
        print(Log.FAIL + msg + Log.ENDC, file=sys.stderr)
        self.app.log.error(Log.FAIL + msg + Log.ENDC)
        if exit:
            self.app.close(1)

    def info(self, msg, end='\n', log=True):
        """
        Logs info messages into log file
        """
        print(Log.OKBLUE + msg + Log.ENDC, end=end)
        if log:
            self.app.log.info(Log.OKBLUE + msg + Log.ENDC)

    def success(self, msg):
        """
        Logs success messages into log file
        """
        print(Log.OKGREEN + 'Success: ' + msg + Log.ENDC)
        self.app.log.info(Log.OKGREEN + 'Success: ' + msg + Log.ENDC)

    def warn(self, msg):
        """
        Logs warning into log file
        """
        print(Log.WARNING + 'Warning: ' + msg + Log.ENDC, file=sys.stderr)
        self.app.log.warning(Log.BOLD + msg + Log.ENDC)

    def debug(self, msg):
        """
        Logs debug messages into log file
        """
        self.app.log.debug(Log.HEADER + msg + Log.ENDC, __name__)

    def wait(self, msg, end='\r', log=True):
        """
        Logs a pending step, completed later with valide() or failed()
        """
        print(Log.OKBLUE + msg + Log.ENDC, end=end)
        if log:
            self.app.log.info(Log.OKBLUE + msg + Log.ENDC)

    def valide(self, msg, end='\n', log=True):
        """
        Logs a completed step
        """
        print(Log.OKBLUE + msg +
              " [" + Log.ENDC + Log.OKGREEN + "OK" +
              Log.ENDC + Log.OKBLUE + "]" + Log.ENDC, end=end)
        if log:
            self.app.log.info(Log.OKGREEN + msg + Log.ENDC)

    def failed(self, msg, end='\n', log=True):
        """
        Logs a failed step
        """
        print(Log.OKBLUE + msg +
              " [" + Log.ENDC + Log.FAIL + "KO" +
              Log.ENDC + Log.OKBLUE + "]" + Log.ENDC, end=end)
        if log:
            self.app.log.info(Log.FAIL + msg + Log.ENDC)
