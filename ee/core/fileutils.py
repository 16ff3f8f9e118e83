"""EasyEngine file utils core classes."""
import os
import shutil

from ee.core.logging import Log


class EEFileUtils():
    """Utilities to operate on files"""

    def __init__():
        pass

    def mkdir(self, path):
        """
            create directories.
            path : path for directory to be created
            Similar to `mkdir -p`
        """
        try:
            Log.debug(self, "Creating directory {0}".format(path))
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            Log.debug(self, "{0}".format(e))
            Log.error(self, "Unable to create directory {0} ".format(path))

    def rm(self, path):
        """
            Remove files or directories. Missing paths are ignored.
        """
        if not os.path.lexists(path):
            return
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                Log.debug(self, "Removing directory {0}".format(path))
                shutil.rmtree(path)
            else:
                Log.debug(self, "Removing file {0}".format(path))
                os.remove(path)
        except OSError as e:
            Log.debug(self, "{err}".format(err=e))
            Log.error(self, "Unable to remove {0}".format(path))

    def mvfile(self, src, dst):
        """
            Moves file from source path to destination path
            src : source path
            dst : Destination path
        """
        try:
            Log.debug(self, "Moving file from {0} to {1}".format(src, dst))
            shutil.move(src, dst)
        except (shutil.Error, OSError) as e:
            Log.debug(self, "{err}".format(err=e))
            Log.error(self, 'Unable to move file from {0} to {1}'
                      .format(src, dst))

    def copyfile(self, src, dest):
        """
        Copies files:
            src : source path
            dest : destination path
        """
        try:
            Log.debug(self, "Copying file, Source:{0}, Dest:{1}"
                      .format(src, dest))
            parent = os.path.dirname(dest)
            if parent:
                os.makedirs(parent, exist_ok=True)
            shutil.copy2(src, dest)
        except (shutil.Error, OSError) as e:
            Log.debug(self, "{0}".format(e))
            Log.error(self, 'Unable to copy file from {0} to {1}'
                      .format(src, dest))

    def dumpfile(self, path, content):
        """
            Write content to path, creating parent directories.
        """
        try:
            Log.debug(self, "Writing file {0}".format(path))
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, encoding='utf-8', mode='w') as out_file:
                out_file.write(content)
        except OSError as e:
            Log.debug(self, "{0}".format(e))
            Log.error(self, 'Unable to write file {0}'.format(path))
