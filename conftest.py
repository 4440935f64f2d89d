# Configuration for the tests.
# Use `py.test` to run the tests.

# (This file needs to be in or above the directory where py.test is called)

import pytest

def pytest_addoption(parser):
    group = parser.getgroup("pokedb")
    group.addoption("--engine", action="store", default=None,
        help="Database URI to test against; a fresh in-memory SQLite "
            "database per test by default.  Tables are dropped afterwards!")

@pytest.fixture
def session(request):
    import pokedb.db
    from pokedb.db.tables import metadata
    engine_uri = request.config.getvalue("engine") or 'sqlite://'
    session = pokedb.db.connect(engine_uri)
    pokedb.db.create_tables(session)
    yield session
    session.rollback()
    metadata.drop_all(bind=session.get_bind())
    session.remove()

@pytest.fixture
def catalog():
    from pokedb.tests import FakeCatalog, add_standard_catalog
    catalog = FakeCatalog()
    add_standard_catalog(catalog)
    return catalog

@pytest.fixture
def fetcher(catalog):
    return catalog.fetcher()

@pytest.fixture
def seeded(session, fetcher):
    """Run a full seed against the standard catalog; returns the report."""
    from pokedb.ingest.pipeline import PipelineOrchestrator
    orchestrator = PipelineOrchestrator(session, fetcher, delay=0, sleep=lambda s: None)
    return orchestrator.run()
