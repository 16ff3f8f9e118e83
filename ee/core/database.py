"""EasyEngine generic database creation module"""
import os

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker

from ee.core.variables import EEVar

engine = create_engine(EEVar.ee_db_uri)
db_session = scoped_session(sessionmaker(autoflush=False, bind=engine))
Base = declarative_base()
Base.query = db_session.query_property()


def bind_db(db_uri):
    """Point the session at another database, used by config and tests"""
    global engine
    db_session.remove()
    engine = create_engine(db_uri)
    db_session.configure(bind=engine)
    return engine


def init_db(app, db_uri=None):
    """
    Initializes and creates all tables from models into the database
    """
    if db_uri:
        bind_db(db_uri)
    if engine.url.get_backend_name() == 'sqlite' and engine.url.database:
        db_dir = os.path.dirname(engine.url.database)
        if db_dir and not os.path.isdir(db_dir):
            os.makedirs(db_dir, exist_ok=True)
    # import models so they register on Base.metadata
    import ee.cli.plugins.models  # noqa: F401
    try:
        app.log.debug("Initializing EasyEngine Database")
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        app.log.error("Unable to initialize database: {0}".format(e))
        raise
