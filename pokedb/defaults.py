""" pokedb.defaults - logic for finding default settings """

import os

DEFAULT_API_URL = 'https://pokeapi.co/api/v2'


def get_default_db_uri_with_origin():
    uri = os.environ.get('POKEDB_DB_ENGINE', None)
    origin = 'environment'

    if uri is None:
        sqlite_path = os.path.join(os.getcwd(), 'pokedb.sqlite')
        uri = 'sqlite:///' + sqlite_path
        origin = 'default'

    return uri, origin

def get_default_api_url_with_origin():
    url = os.environ.get('POKEDB_API_URL', None)
    origin = 'environment'

    if url is None:
        url = DEFAULT_API_URL
        origin = 'default'

    return url, origin


def get_default_db_uri():
    return get_default_db_uri_with_origin()[0]

def get_default_api_url():
    return get_default_api_url_with_origin()[0]
