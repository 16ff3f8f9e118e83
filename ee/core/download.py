"""EasyEngine download core classes."""
import os

import requests

from ee.core.exc import EEError
from ee.core.logging import Log
from ee.core.variables import EEVar


class NetworkError(EEError):
    """Raised when a file cannot be downloaded"""
    pass


class EEDownload():
    """Method to download using requests"""

    def __init__():
        pass

    def download(self, packages, timeout=None):
        """Download packages, packages must be a list in format
        [[url, path, package_name], ...]"""
        if timeout is None:
            timeout = EEVar.ee_download_timeout
        for package in packages:
            url = package[0]
            filename = package[1]
            pkg_name = package[2]
            directory = os.path.dirname(filename)
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            Log.wait(self, "Downloading {0:20}".format(pkg_name))
            try:
                with requests.get(url, stream=True,
                                  timeout=(30, timeout)) as req:
                    req.raise_for_status()
                    with open(filename, "wb") as out_file:
                        for chunk in req.iter_content(chunk_size=65536):
                            out_file.write(chunk)
            except (requests.RequestException, OSError) as e:
                Log.failed(self, "Downloading {0:20}".format(pkg_name))
                Log.debug(self, "[{err}]".format(err=str(e)))
                raise NetworkError(
                    "Unable to download {0} from {1}".format(pkg_name, url))
            Log.valide(self, "Downloading {0:20}".format(pkg_name))
        return True
