"""EasyEngine advisory lock files"""
import fcntl
import json
import os
import time

from ee.core.exc import EEError
from ee.core.logging import Log


class LockError(EEError):
    """Raised when a lock cannot be acquired"""
    pass


class EELock:
    """Lock file held with flock(2).

    The kernel owns the lock: it is released when the holder closes the
    file or dies, so a lock left behind by a crashed ee run is simply taken
    over. The file records pid and timestamp of the holder for humans.

        with EELock(self, '/run/ee-admin-tools-install.lock', wait=600):
            ...
    """

    def __init__(self, controller, path, wait=0, interval=0.5):
        self.controller = controller
        self.path = path
        self.wait = wait
        self.interval = interval
        self.fd = None

    @property
    def acquired(self):
        return self.fd is not None

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False

    def _open(self):
        try:
            return os.open(self.path, os.O_CREAT | os.O_RDWR, 0o644)
        except OSError as e:
            Log.debug(self.controller,
                      'lock open error for {0}: {1}'.format(self.path, e))
            raise LockError('Unable to create lock file {0}'
                            .format(self.path))

    def _same_file(self, fd):
        # the holder unlinks the file on release, a lock taken on the
        # unlinked inode protects nothing
        try:
            return os.stat(self.path).st_ino == os.fstat(fd).st_ino
        except FileNotFoundError:
            return False

    @staticmethod
    def _holder(fd):
        try:
            data = json.loads(os.read(fd, 4096).decode('utf-8'))
            return int(data.get('pid', 0))
        except (OSError, ValueError, AttributeError):
            return 0

    @staticmethod
    def _alive(pid):
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True

    def _record(self, fd):
        payload = json.dumps({'pid': os.getpid(), 'ts': time.time()})
        os.ftruncate(fd, 0)
        os.lseek(fd, 0, os.SEEK_SET)
        os.write(fd, payload.encode('utf-8'))

    def try_acquire(self):
        """Attempt to take the lock once. Returns True on success."""
        while True:
            fd = self._open()
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                os.close(fd)
                return False
            except OSError as e:
                os.close(fd)
                Log.debug(self.controller,
                          'flock error for {0}: {1}'.format(self.path, e))
                raise LockError('Unable to lock {0}'.format(self.path))
            if self._same_file(fd):
                break
            os.close(fd)

        previous = self._holder(fd)
        self._record(fd)
        self.fd = fd
        if previous and previous != os.getpid() and \
                not self._alive(previous):
            Log.warn(self.controller, 'Recovered stale lock: {0}'
                     .format(self.path))
        return True

    def acquire(self):
        deadline = time.monotonic() + self.wait
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        while True:
            if self.try_acquire():
                Log.debug(self.controller, 'Acquired lock {0}'.format(self.path))
                return True
            if time.monotonic() >= deadline:
                raise LockError(
                    'Another ee process holds {0}, try again later.'
                    .format(self.path))
            Log.debug(self.controller, 'Waiting for lock {0}'.format(self.path))
            time.sleep(self.interval)

    def release(self):
        if self.fd is None:
            return
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        os.close(self.fd)
        self.fd = None
        Log.debug(self.controller, 'Released lock {0}'.format(self.path))
