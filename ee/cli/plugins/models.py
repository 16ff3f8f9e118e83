from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from ee.core.database import Base, db_session


class Site(Base):
    """
        Database model for site table
    """
    __tablename__ = 'sites'
    __table_args__ = {'extend_existing': True}

    id = Column(Integer, primary_key=True)
    site_url = Column(String, unique=True)

    site_type = Column(String)
    app_sub_type = Column(String)
    site_fs_path = Column(String)
    site_enabled = Column(Boolean, default=True)
    admin_tools = Column(Boolean, default=False)
    created_on = Column(DateTime, default=func.now())
    modified_on = Column(DateTime, default=func.now(), onupdate=func.now())

    def __init__(self, site_url=None, site_type=None, app_sub_type=None,
                 site_fs_path=None, site_enabled=True, admin_tools=False):
        self.site_url = site_url
        self.site_type = site_type
        self.app_sub_type = app_sub_type
        self.site_fs_path = site_fs_path
        self.site_enabled = site_enabled
        self.admin_tools = admin_tools

    def save(self):
        """Persist the mutated fields of this site"""
        try:
            db_session.add(self)
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    def __repr__(self):
        return '<Site %r>' % (self.site_url)
