import fcntl
import json
import os
import time
from unittest import mock

import pytest

from ee.core import lock as lock_module
from ee.core.lock import EELock, LockError


def write_holder(path, pid):
    with open(path, 'w') as lock_file:
        json.dump({'pid': pid, 'ts': 0}, lock_file)


def test_lock_is_released(tmp_path):
    path = str(tmp_path / 'run' / 'test.lock')
    with EELock(mock.Mock(), path) as lock:
        assert lock.acquired
        with open(path) as lock_file:
            assert json.load(lock_file)['pid'] == os.getpid()
    assert not lock.acquired
    assert not os.path.exists(path)


def test_lock_released_on_error(tmp_path):
    path = str(tmp_path / 'test.lock')
    with pytest.raises(ValueError):
        with EELock(mock.Mock(), path):
            raise ValueError('boom')
    assert not os.path.exists(path)


def test_held_lock_raises(tmp_path):
    path = str(tmp_path / 'test.lock')
    with EELock(mock.Mock(), path):
        with pytest.raises(LockError):
            EELock(mock.Mock(), path, wait=0).acquire()
        assert os.path.exists(path)
    assert EELock(mock.Mock(), path).try_acquire()


def test_held_lock_waits_then_raises(tmp_path):
    path = str(tmp_path / 'test.lock')
    with EELock(mock.Mock(), path):
        with mock.patch('ee.core.lock.time') as mock_time:
            mock_time.time.return_value = time.time()
            mock_time.monotonic.side_effect = [0, 0, 1, 2]
            with pytest.raises(LockError):
                EELock(mock.Mock(), path, wait=2).acquire()
        assert mock_time.sleep.call_count == 2


def test_leftover_lock_of_dead_process_is_taken_over(tmp_path):
    path = str(tmp_path / 'test.lock')
    write_holder(path, 999999999)
    controller = mock.Mock()
    with EELock(controller, path):
        with open(path) as lock_file:
            assert json.load(lock_file)['pid'] == os.getpid()
    assert controller.app.log.warning.called


def test_recovered_lock_has_a_single_holder(tmp_path):
    path = str(tmp_path / 'test.lock')
    write_holder(path, 999999999)
    first = EELock(mock.Mock(), path)
    second = EELock(mock.Mock(), path)

    assert first.try_acquire()
    assert not second.try_acquire()
    first.release()
    assert second.try_acquire()
    second.release()


def test_lock_on_released_file_is_retried(tmp_path):
    path = str(tmp_path / 'test.lock')
    holder = EELock(mock.Mock(), path)
    assert holder.try_acquire()

    real_flock = fcntl.flock
    calls = []

    def release_then_flock(fd, operation):
        # the holder releases between our open() and flock()
        if not calls:
            holder.release()
        calls.append(fd)
        return real_flock(fd, operation)

    waiter = EELock(mock.Mock(), path)
    with mock.patch.object(lock_module.fcntl, 'flock',
                           side_effect=release_then_flock):
        assert waiter.try_acquire()
    assert len(calls) == 2
    assert os.stat(path).st_ino == os.fstat(waiter.fd).st_ino
    assert not EELock(mock.Mock(), path).try_acquire()
    waiter.release()
