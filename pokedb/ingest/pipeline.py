u"""A full reseed: clear everything, seed types, then seed each generation.

Pokémon are processed one at a time, in catalog order, with a short pause
after each to go easy on the catalog.  A Pokémon that fails is logged and
skipped; only failures in clearing, type seeding or fetching a generation's
list abort the run.
"""

import logging
import time

from pokedb.db import create_tables, tables
from pokedb.ingest import FatalOrchestrationError
from pokedb.ingest.cache import EntityCache
from pokedb.ingest.payload import id_from_url
from pokedb.ingest.report import RunReport, SubjectResult
from pokedb.ingest.species import SpeciesIngestor
from pokedb.progress import ProgressPrinter

log = logging.getLogger(__name__)

#: (offset, limit) into the catalog's Pokémon list for generations 1 to 7
GENERATION_WINDOWS = [
    (0, 151),
    (151, 100),
    (251, 135),
    (386, 107),
    (493, 156),
    (649, 72),
    (721, 88),
]

#: Owned rows first, then Pokémon, then the reference tables they point to
CLEAR_ORDER = [
    tables.Encounter,
    tables.PokemonMove,
    tables.PokemonAbility,
    tables.PokedexEntry,
    tables.Stat,
    tables.PokemonType,
    tables.PokemonEggGroup,
    tables.Pokemon,
    tables.Move,
    tables.Ability,
    tables.EvolutionChain,
    tables.EggGroup,
    tables.Type,
]

TYPE_LIST_LIMIT = 50


def clear_tables(session):
    """Delete every row the seeder owns, in dependency order."""
    for table in CLEAR_ORDER:
        count = session.query(table).delete(synchronize_session=False)
        log.info("Cleared %d rows from %s", count, table.__tablename__)
    session.commit()
    session.expunge_all()


class PipelineOrchestrator(object):
    """Runs a full reseed.

    `state` moves through CLEARING, SEEDING_TYPES, SEEDING_GENERATIONS and
    DONE, or ends at FAILED.
    """

    CLEARING = 'clearing'
    SEEDING_TYPES = 'seeding types'
    SEEDING_GENERATIONS = 'seeding generations'
    DONE = 'done'
    FAILED = 'failed'

    def __init__(self, session, fetcher, cache=None, windows=GENERATION_WINDOWS,
                 delay=0.1, sleep=time.sleep, verbose=False):
        self.session = session
        self.fetcher = fetcher
        if cache is None:
            cache = EntityCache(session, fetcher)
        self.cache = cache
        self.windows = windows
        self.delay = delay
        self.sleep = sleep
        self.progress = ProgressPrinter(verbose)
        self.state = None

    def run(self):
        """Reseed everything and return a RunReport.

        Raises FatalOrchestrationError if the run had to be abandoned.
        """
        report = RunReport()
        try:
            self.state = self.CLEARING
            create_tables(self.session)
            clear_tables(self.session)
            self.cache.forget()

            self.state = self.SEEDING_TYPES
            self.seed_types()

            self.state = self.SEEDING_GENERATIONS
            for generation, (offset, limit) in enumerate(self.windows, 1):
                self.seed_generation(generation, offset, limit, report)
        except Exception as e:
            failed_state = self.state
            self.state = self.FAILED
            self.session.rollback()
            log.error("Seeding aborted while %s: %s", failed_state, e)
            raise FatalOrchestrationError(failed_state, e)

        self.state = self.DONE
        return report

    def seed_types(self):
        self.progress.start('Types')

        url = self.fetcher.url_for('type', limit=TYPE_LIST_LIMIT)
        results = self.fetcher.get(url)['results']
        for n, entry in enumerate(results):
            self.cache.resolve('type', entry['name'], entry['url'])
            self.progress.status('%s/%s' % (n + 1, len(results)))

        self.progress.succeeded(u"%d types" % len(results))
        log.info("Seeded %d types", len(results))

    def seed_generation(self, generation, offset, limit, report):
        """Seed one generation window; per-Pokémon failures go in `report`."""

        url = self.fetcher.url_for('pokemon', offset=offset, limit=limit)
        entries = self.fetcher.get(url)['results']
        log.info("Generation %d: %d Pokemon", generation, len(entries))

        ingestor = SpeciesIngestor(self.session, self.fetcher, self.cache,
                                   progress=self.progress.status)
        for entry in entries:
            self.progress.start(u'Gen %d: %s' % (generation, entry['name']))
            try:
                result = ingestor.ingest(entry['url'], generation)
            except Exception as e:
                self.session.rollback()
                log.warning("Pokemon %s (%s) failed: %s", entry['name'], entry['url'], e)
                result = SubjectResult(id_from_url(entry['url']), entry['name'], error=str(e))
                self.progress.failed(e)
            else:
                self.progress.succeeded()
            report.add(result)

            self.sleep(self.delay)
