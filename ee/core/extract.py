"""EasyEngine extract core classes."""
import tarfile
import zipfile

from ee.core.exc import EEError
from ee.core.logging import Log


class ExtractionError(EEError):
    """Raised when an archive cannot be extracted"""
    pass


class EEExtract():
    """Method to extract from tar.gz and zip files"""

    def extract(self, file, path):
        """Function to extract zip and tar archives"""
        try:
            if zipfile.is_zipfile(file):
                Log.debug(self, "Extracting zip {0} to {1}".format(file, path))
                with zipfile.ZipFile(file) as archive:
                    archive.extractall(path=path)
            elif tarfile.is_tarfile(file):
                Log.debug(self, "Extracting tar {0} to {1}".format(file, path))
                with tarfile.open(file) as archive:
                    archive.extractall(path=path, filter='data')
            else:
                Log.debug(self, "{0} is not a supported archive".format(file))
                return False
            return True
        except (zipfile.BadZipFile, tarfile.TarError, OSError) as e:
            Log.debug(self, "{0}".format(e))
            Log.error(self, 'Unable to extract file {0}'.format(file),
                      exit=False)
            return False
