"""admin-tools installation for EasyEngine

Tools are declared in a JSON manifest mapping a tool id to its download
url and optional version. Each tool id has an installer registered in
TOOL_INSTALLERS; AdminToolsInstaller walks the manifest in order and
installs whatever is missing from the tools root.
"""
import json
import os
import re

from ee.core.download import EEDownload
from ee.core.exc import EEConfigError, EEError
from ee.core.extract import EEExtract, ExtractionError
from ee.core.fileutils import EEFileUtils
from ee.core.lock import EELock
from ee.core.logging import Log
from ee.core.random import RANDOM
from ee.core.template import EETemplate
from ee.core.variables import EEVar


class AdminToolsError(EEError):
    """Base class for admin-tools errors"""
    pass


class ManifestError(AdminToolsError):
    pass


class ManifestFormatError(ManifestError):
    pass


class ManifestReadError(ManifestError):
    pass


class ManifestParseError(ManifestError):
    pass


class ManifestEmptyError(ManifestError):
    pass


class UnknownToolError(AdminToolsError):
    pass


class AdminToolsConfig:
    """Paths and timeouts used while installing and toggling admin-tools"""

    SECTION = 'admin-tools'

    def __init__(self, root_dir=None, tools_file=None, template_dir=None,
                 tmp_dir=None, lock_dir=None, db_path=None, admin_path=None,
                 auth_dir=None, download_timeout=None, compose_timeout=None,
                 install_lock_timeout=None):
        self.root_dir = root_dir or EEVar.ee_admin_tools_dir
        self.tools_file = tools_file or EEVar.ee_admin_tools_file
        self.template_dir = template_dir or EEVar.ee_template_dir
        self.tmp_dir = tmp_dir or EEVar.ee_tmp_dir
        self.lock_dir = lock_dir or EEVar.ee_lock_dir
        self.db_path = db_path or EEVar.ee_db_path
        self.admin_path = admin_path or EEVar.ee_admin_path
        self.auth_dir = auth_dir or EEVar.ee_admin_auth_dir
        self.download_timeout = self._seconds(
            'download_timeout', download_timeout, EEVar.ee_download_timeout)
        self.compose_timeout = self._seconds(
            'compose_timeout', compose_timeout, EEVar.ee_compose_timeout)
        self.install_lock_timeout = self._seconds(
            'install_lock_timeout', install_lock_timeout,
            EEVar.ee_install_lock_timeout)

    @staticmethod
    def _seconds(key, value, default):
        if value is None:
            return default
        try:
            seconds = int(value)
        except (TypeError, ValueError):
            seconds = -1
        if seconds < 0:
            raise EEConfigError(
                'Invalid {0} in [admin-tools]: {1}'.format(key, value))
        return seconds

    @property
    def install_lock_path(self):
        return os.path.join(self.lock_dir, 'ee-admin-tools-install.lock')

    def site_lock_path(self, site_url):
        slug = re.sub(r'[^a-z0-9-]', '-', site_url.lower())
        return os.path.join(self.lock_dir,
                            'ee-admin-tools-{0}.lock'.format(slug))

    @classmethod
    def from_app(cls, app):
        """Build the configuration from the [admin-tools] config section"""
        return cls(**cls.app_values(app))

    @classmethod
    def app_values(cls, app):
        """Known, non-empty keys of the [admin-tools] config section"""
        values = {}
        if app.config.has_section(cls.SECTION):
            for key in app.config.keys(cls.SECTION):
                value = app.config.get(cls.SECTION, key)
                if value not in (None, ''):
                    values[key.replace('-', '_')] = value
        known = ('root_dir', 'tools_file', 'template_dir', 'tmp_dir',
                 'lock_dir', 'db_path', 'admin_path', 'auth_dir',
                 'download_timeout', 'compose_timeout',
                 'install_lock_timeout')
        return {k: v for k, v in values.items() if k in known}


class ToolManifestEntry:
    """One tool of the admin-tools manifest"""

    def __init__(self, tool_id, url=None, version=None):
        self.tool_id = tool_id
        self.url = url
        self.version = version

    def resolved_url(self):
        """Download url with {version} substituted"""
        if not self.url:
            raise ManifestParseError(
                'No url found for {0} in admin-tools file.'
                .format(self.tool_id))
        if '{version}' in self.url:
            if not self.version:
                raise ManifestParseError(
                    'No version found for {0} in admin-tools file.'
                    .format(self.tool_id))
            return self.url.replace('{version}', str(self.version))
        return self.url

    def __eq__(self, other):
        return (isinstance(other, ToolManifestEntry) and
                (self.tool_id, self.url, self.version) ==
                (other.tool_id, other.url, other.version))

    def __repr__(self):
        return '<ToolManifestEntry %r>' % (self.tool_id)


def load_manifest(path):
    """Read the admin-tools manifest, returning tool id -> ToolManifestEntry
    in file order."""
    if os.path.splitext(path)[1].lower() != '.json':
        raise ManifestFormatError(
            'Invalid admin-tools file found. Aborting.')
    try:
        with open(path, encoding='utf-8') as tools_file:
            content = tools_file.read()
    except OSError as e:
        raise ManifestReadError(
            'Unable to read admin-tools file {0}: {1}'.format(path, e))
    if not content.strip():
        raise ManifestReadError(
            'admin-tools file is empty. Can\'t proceed further.')
    try:
        tools = json.loads(content)
    except ValueError as e:
        raise ManifestParseError(
            'Error decoding admin-tools file: {0}'.format(e))
    if not isinstance(tools, dict):
        raise ManifestParseError(
            'Error decoding admin-tools file: expected an object of tools.')
    if not tools:
        raise ManifestEmptyError(
            'No data found in admin-tools file. Can\'t proceed further.')

    entries = {}
    for tool_id, data in tools.items():
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ManifestParseError(
                'Error decoding admin-tools file: entry {0} is not an object.'
                .format(tool_id))
        entries[tool_id] = ToolManifestEntry(
            tool_id, url=data.get('url'), version=data.get('version'))
    return entries


class ToolProber:
    """Tells whether a tool artifact is present under the tools root.

    Never caches: an install may have been interrupted between two runs.
    """

    SINGLE_FILE_TOOLS = ('index', 'phpinfo')

    def __init__(self, root_dir):
        self.root_dir = root_dir

    def artifact_name(self, tool_id):
        if tool_id in self.SINGLE_FILE_TOOLS:
            return tool_id + '.php'
        if tool_id == 'opcache':
            return tool_id + '-gui.php'
        return tool_id

    def is_installed(self, tool_id=None):
        if not tool_id:
            return os.path.isdir(self.root_dir)
        return os.path.exists(
            os.path.join(self.root_dir, self.artifact_name(tool_id)))


class FetchExtractPipeline:
    """Download an archive, extract it and relocate its root folder"""

    IGNORED_ENTRIES = ('__MACOSX',)

    def __init__(self, controller, config):
        self.controller = controller
        self.config = config

    def scratch_paths(self, name):
        return (os.path.join(self.config.tmp_dir, name + '.zip'),
                os.path.join(self.config.tmp_dir, name))

    def clean(self, *paths):
        for path in paths:
            EEFileUtils.rm(self.controller, path)

    def download(self, url, destination, label):
        EEDownload.download(self.controller, [[url, destination, label]],
                            timeout=self.config.download_timeout)

    def extract(self, archive, destination):
        if not EEExtract.extract(self.controller, archive, destination):
            raise ExtractionError(
                'Unable to extract {0}, it is not a valid archive.'
                .format(archive))

    def extracted_root(self, folder):
        """The single directory an archive was extracted into"""
        entries = [entry for entry in sorted(os.listdir(folder))
                   if not entry.startswith('.') and
                   entry not in self.IGNORED_ENTRIES]
        if len(entries) != 1:
            raise ExtractionError(
                'Expected a single folder in {0}, found {1}.'
                .format(folder, len(entries)))
        root = os.path.join(folder, entries[0])
        if not os.path.isdir(root):
            raise ExtractionError(
                'Expected a folder in {0}, found file {1}.'
                .format(folder, entries[0]))
        return root

    def relocate(self, source, destination):
        if os.path.lexists(destination):
            EEFileUtils.rm(self.controller, destination)
        parent = os.path.dirname(destination)
        if parent:
            EEFileUtils.mkdir(self.controller, parent)
        EEFileUtils.mvfile(self.controller, source, destination)

    def fetch(self, name, url, label=None):
        """Download and extract url, return the extracted root folder"""
        download_path, unzip_folder = self.scratch_paths(name)
        self.clean(download_path, unzip_folder)
        EEFileUtils.mkdir(self.controller, self.config.tmp_dir)
        self.download(url, download_path, label or name)
        self.extract(download_path, unzip_folder)
        EEFileUtils.rm(self.controller, download_path)
        return self.extracted_root(unzip_folder)

    def fetch_file(self, name, url, label=None):
        """Download url as a single file in the scratch directory"""
        download_path = os.path.join(self.config.tmp_dir, name)
        self.clean(download_path)
        EEFileUtils.mkdir(self.controller, self.config.tmp_dir)
        self.download(url, download_path, label or name)
        return download_path


class ToolInstaller:
    """Installs one tool at tool_path"""

    label = None

    def __init__(self, controller, config, pipeline):
        self.controller = controller
        self.config = config
        self.pipeline = pipeline

    def install(self, entry, tool_path):
        raise NotImplementedError

    def deploy_template(self, destination, template, data):
        EETemplate.deploy(self.controller, destination, template, data,
                          template_dir=self.config.template_dir)

    def copy_template(self, destination, template):
        EEFileUtils.copyfile(
            self.controller,
            EETemplate.path(self.controller, template,
                            self.config.template_dir),
            destination)


class IndexInstaller(ToolInstaller):
    """Landing page listing the admin tools"""
    label = 'index'

    def install(self, entry, tool_path):
        data = {
            'db_path': self.config.db_path,
            'ee_admin_path': self.config.admin_path,
        }
        self.deploy_template(tool_path + '.php', 'index.mustache', data)


class PhpInfoInstaller(ToolInstaller):
    label = 'phpinfo'

    def install(self, entry, tool_path):
        self.copy_template(tool_path + '.php', 'phpinfo.mustache')


class PmaInstaller(ToolInstaller):
    """phpMyAdmin, configured with a fresh blowfish secret"""
    label = 'phpMyAdmin'

    def install(self, entry, tool_path):
        root = self.pipeline.fetch('pma', entry.resolved_url(), self.label)
        self.deploy_template(
            os.path.join(root, 'config.inc.php'),
            'pma.config.mustache',
            {'blowfish_secret': RANDOM.secret(self.controller)})
        self.pipeline.relocate(root, tool_path)


class PraInstaller(ToolInstaller):
    """phpRedisAdmin, bundled with the predis library it needs"""
    label = 'phpRedisAdmin'

    def install(self, entry, tool_path):
        root = self.pipeline.fetch('pra', entry.resolved_url(), self.label)
        vendor_root = self.pipeline.fetch(
            'predis', EEVar.ee_predis_url,
            'predis {0}'.format(EEVar.ee_predis_version))
        self.pipeline.relocate(vendor_root, os.path.join(root, 'vendor'))
        self.copy_template(os.path.join(root, 'includes', 'config.inc.php'),
                           'pra.config.mustache')
        self.pipeline.relocate(root, tool_path)


class OpcacheInstaller(ToolInstaller):
    label = 'opcache-gui'

    def install(self, entry, tool_path):
        download_path = self.pipeline.fetch_file(
            'opcache-gui.php', entry.resolved_url(), self.label)
        EEFileUtils.mvfile(self.controller, download_path,
                           tool_path + '-gui.php')


TOOL_INSTALLERS = {
    'index': IndexInstaller,
    'phpinfo': PhpInfoInstaller,
    'pma': PmaInstaller,
    'pra': PraInstaller,
    'opcache': OpcacheInstaller,
}


def get_installer(tool_id, registry=None):
    registry = TOOL_INSTALLERS if registry is None else registry
    try:
        return registry[tool_id]
    except KeyError:
        raise UnknownToolError(
            'No method found to install {0}. Aborting.'.format(tool_id))


class AdminToolsInstaller:
    """Installs every tool of the manifest missing from the tools root.

    Safe to run repeatedly: installed tools are skipped, so a run aborted
    by an error resumes where it stopped on the next call.
    """

    def __init__(self, controller, config, registry=None):
        self.controller = controller
        self.config = config
        self.registry = TOOL_INSTALLERS if registry is None else registry
        self.prober = ToolProber(config.root_dir)
        self.pipeline = FetchExtractPipeline(controller, config)

    def install(self):
        """Returns the ids of the tools installed by this run"""
        with EELock(self.controller, self.config.install_lock_path,
                    wait=self.config.install_lock_timeout):
            return self._install()

    def _install(self):
        if not self.prober.is_installed():
            Log.info(self.controller,
                     'Installing admin-tools. This may take some time.')
            EEFileUtils.mkdir(self.controller, self.config.root_dir)

        Log.debug(self.controller,
                  'admin-tools file: {0}'.format(self.config.tools_file))
        tools = load_manifest(self.config.tools_file)

        installed = []
        for tool_id, entry in tools.items():
            installer = get_installer(tool_id, self.registry)
            if self.prober.is_installed(tool_id):
                Log.debug(self.controller,
                          '{0} is already installed'.format(tool_id))
                continue
            Log.info(self.controller, 'Installing {0}'.format(tool_id))
            tool_path = os.path.join(self.config.root_dir, tool_id)
            installer(self.controller, self.config,
                      self.pipeline).install(entry, tool_path)
            Log.success(self.controller,
                        'Installed {0} successfully.'.format(tool_id))
            installed.append(tool_id)
        return installed
