# encoding: utf-8
from sqlalchemy import engine_from_config, orm

from ..defaults import get_default_db_uri
from .tables import metadata


def connect(uri=None, session_args={}, engine_args={}, engine_prefix=''):
    """Connects to the requested URI.  Returns a session object.

    With the URI omitted, attempts to connect to the default database
    (see `pokedb.defaults`).
    """

    # If we didn't get a uri, fall back to the default
    if uri is None:
        uri = engine_args.get(engine_prefix + 'url', None)
    if uri is None:
        uri = get_default_db_uri()

    ### Do some fixery for MySQL
    if uri.startswith('mysql:'):
        # MySQL uses latin1 for connections by default even if the server is
        # otherwise oozing with utf8; charset fixes this
        if 'charset' not in uri:
            uri += '?charset=utf8'

        for table in metadata.tables.values():
            table.kwargs['mysql_engine'] = 'InnoDB'
            table.kwargs['mysql_charset'] = 'utf8'

    ### Connect
    engine_args = dict(engine_args)
    engine_args[engine_prefix + 'url'] = uri
    engine = engine_from_config(engine_args, prefix=engine_prefix)

    all_session_args = dict(autoflush=True, bind=engine)
    all_session_args.update(session_args)
    sm = orm.sessionmaker(**all_session_args)
    session = orm.scoped_session(sm)

    return session

def create_tables(session):
    """Creates any missing tables in the session's database."""
    metadata.create_all(bind=session.get_bind(), checkfirst=True)
