import os
from unittest import mock

from ee.core.fileutils import EEFileUtils


class Dummy:
    class App:
        class Log:
            def debug(self, *args, **kwargs):
                pass

            def error(self, *args, **kwargs):
                pass

            def info(self, *args, **kwargs):
                pass

            def warning(self, *args, **kwargs):
                pass
        log = Log()

        def close(self, code=None):
            self.exit_code = code
    app = App()


def test_mvfile_moves_directory(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "index.php").write_text("hello")
    dest = tmp_path / "nested" / "dest"
    dest.parent.mkdir()
    EEFileUtils.mvfile(Dummy(), str(src), str(dest))
    assert (dest / "index.php").read_text() == "hello"
    assert not src.exists()


def test_rm_handles_files_directories_and_missing(tmp_path):
    folder = tmp_path / "folder"
    (folder / "sub").mkdir(parents=True)
    (folder / "sub" / "file.txt").write_text("x")
    single = tmp_path / "single.txt"
    single.write_text("x")

    EEFileUtils.rm(Dummy(), str(folder))
    EEFileUtils.rm(Dummy(), str(single))
    EEFileUtils.rm(Dummy(), str(tmp_path / "missing"))
    assert os.listdir(str(tmp_path)) == []


def test_dumpfile_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "config.inc.php"
    EEFileUtils.dumpfile(Dummy(), str(target), "<?php\n")
    assert target.read_text() == "<?php\n"


def test_copyfile_creates_parents(tmp_path):
    src = tmp_path / "template.mustache"
    src.write_text("static")
    dest = tmp_path / "pra" / "includes" / "config.inc.php"
    EEFileUtils.copyfile(Dummy(), str(src), str(dest))
    assert dest.read_text() == "static"


def test_mvfile_failure_is_reported():
    controller = mock.Mock()
    EEFileUtils.mvfile(controller, '/nonexistent/src', '/nonexistent/dest')
    controller.app.close.assert_called_once_with(1)
