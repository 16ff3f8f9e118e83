import os
import zipfile
from unittest import mock

import pytest

from ee.cli.plugins.admin_tools_functions import AdminToolsConfig
from ee.core.database import Base, bind_db, db_session


@pytest.fixture
def controller():
    """Stand-in for a cement controller, Log only needs `.app`"""
    return mock.Mock()


@pytest.fixture
def config(tmp_path):
    return AdminToolsConfig(
        root_dir=str(tmp_path / 'admin-tools'),
        tools_file=str(tmp_path / 'admin-tools.json'),
        tmp_dir=str(tmp_path / 'scratch'),
        lock_dir=str(tmp_path / 'run'),
        db_path=str(tmp_path / 'db' / 'ee.sqlite'),
        auth_dir=str(tmp_path / 'htpasswd'),
    )


@pytest.fixture
def db(tmp_path):
    import ee.cli.plugins.models  # noqa: F401
    engine = bind_db('sqlite:///{0}'.format(tmp_path / 'ee.sqlite'))
    Base.metadata.create_all(bind=engine)
    yield db_session
    db_session.remove()
    engine.dispose()


def make_zip(path, files):
    """Create a zip at path; files maps archive names to content,
    names ending with '/' become directories."""
    os.makedirs(os.path.dirname(str(path)), exist_ok=True)
    with zipfile.ZipFile(str(path), 'w') as archive:
        for name, content in files.items():
            if name.endswith('/'):
                archive.writestr(zipfile.ZipInfo(name), '')
            else:
                archive.writestr(name, content)
    return str(path)


@pytest.fixture
def zip_factory():
    return make_zip
