import os

from sqlalchemy.exc import SQLAlchemyError

from ee.cli.plugins.models import Site
from ee.core.database import db_session
from ee.core.logging import Log


def addNewSite(self, site, stype, subtype, path, enabled=True,
               admin_tools=False):
    """
    Add New Site record information into ee database.
    """
    try:
        newRec = Site(site, stype, subtype, path, enabled, admin_tools)
        db_session.add(newRec)
        db_session.commit()
        return newRec
    except SQLAlchemyError as e:
        db_session.rollback()
        Log.debug(self, "{0}".format(e))
        Log.error(self, "Unable to add site to database")


def getSiteInfo(self, site):
    """
        Retrieves site record from ee database
    """
    try:
        q = Site.query.filter(Site.site_url == site).first()
        return q
    except SQLAlchemyError as e:
        Log.debug(self, "{0}".format(e))
        Log.error(self, "Unable to query database for site info")


def getAllsites(self):
    """
        1. returns all records from ee database
    """
    try:
        q = Site.query.all()
        return q
    except SQLAlchemyError as e:
        Log.debug(self, "{0}".format(e))
        Log.error(self, "Unable to query database")


def find_site_by_path(self, path):
    """
        Returns the site whose site_fs_path contains path, if any
    """
    path = os.path.realpath(path)
    for site in getAllsites(self) or []:
        if not site.site_fs_path:
            continue
        root = os.path.realpath(site.site_fs_path)
        if path == root or path.startswith(root + os.sep):
            return site
    return None


def auto_site_name(self, site_name=None, cwd=None):
    """
        Site name from arguments, or from the site the working
        directory belongs to. Trailing slashes are dropped.
    """
    if site_name:
        return site_name.strip().rstrip('/')
    site = find_site_by_path(self, cwd or os.getcwd())
    if site:
        Log.debug(self, "Resolved site {0} from working directory"
                  .format(site.site_url))
        return site.site_url
    return None
