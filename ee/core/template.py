"""EasyEngine template rendering"""
import os

import pystache

from ee.core.fileutils import EEFileUtils
from ee.core.logging import Log
from ee.core.variables import EEVar


class EETemplate:
    """EasyEngine template utilities"""

    def __init__(self):
        pass

    def path(self, template, template_dir=None):
        """Resolve a template name against the template directory"""
        if os.path.isabs(template):
            return template
        return os.path.join(template_dir or EEVar.ee_template_dir, template)

    def read(self, template, template_dir=None):
        """Return the raw content of a template"""
        template_path = EETemplate.path(self, template, template_dir)
        Log.debug(self, 'Reading template {0}'.format(template_path))
        with open(template_path, encoding='utf-8') as template_file:
            return template_file.read()

    def render(self, template, data, template_dir=None):
        """Render a mustache template with data and return the result"""
        # generated files are php and yaml, html escaping would corrupt them
        renderer = pystache.Renderer(escape=lambda u: u,
                                     missing_tags='ignore')
        return renderer.render(
            EETemplate.read(self, template, template_dir), dict(data))

    def deploy(self, fileconf, template, data, overwrite=True,
               template_dir=None):
        """Deploy template with render()"""
        if os.path.isfile('{0}.custom'.format(fileconf)):
            Log.debug(self, 'Keeping custom file {0}.custom'.format(fileconf))
            return
        if os.path.isfile(fileconf) and not overwrite:
            Log.debug(self, 'File {0} already exists'.format(fileconf))
            return
        Log.debug(self, 'Writting the configuration to file {0}'
                  .format(fileconf))
        EEFileUtils.dumpfile(self, fileconf, EETemplate.render(
            self, template, data, template_dir))
