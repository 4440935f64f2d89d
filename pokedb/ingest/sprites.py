u"""Refreshing the shiny sprite columns of Pokémon already in the database.

Independent of the seeding pipeline: no rows are created or deleted, and
only the columns in SPRITE_COLUMNS are ever written.
"""

import logging
import time

from pokedb.db import tables
from pokedb.ingest.payload import pick_sprites
from pokedb.ingest.report import RunReport, SubjectResult, UnitResult
from pokedb.progress import ProgressPrinter

log = logging.getLogger(__name__)

SPRITE_COLUMNS = ('sprite_artwork_shiny', 'sprite_home_shiny')


class SpriteRefresher(object):
    def __init__(self, session, fetcher, delay=0.1, sleep=time.sleep, verbose=False):
        self.session = session
        self.fetcher = fetcher
        self.delay = delay
        self.sleep = sleep
        self.progress = ProgressPrinter(verbose)

    def run(self):
        report = RunReport()

        rows = (self.session.query(tables.Pokemon.id, tables.Pokemon.name)
            .order_by(tables.Pokemon.id)
            .all())
        log.info("Refreshing sprites for %d Pokemon", len(rows))

        for pokemon_id, name in rows:
            self.progress.start(u'%s (#%d)' % (name, pokemon_id))
            result = SubjectResult(pokemon_id, name)
            try:
                changes = self.refresh(pokemon_id)
            except Exception as e:
                self.session.rollback()
                log.warning("Pokemon %s (#%d): sprite refresh failed: %s", name, pokemon_id, e)
                result.error = str(e)
                self.progress.failed(e)
            else:
                result.units.append(UnitResult.done('sprites', pokemon_id))
                self.progress.succeeded(u"%d updated" % len(changes))
            report.add(result)

            self.sleep(self.delay)

        return report

    def refresh(self, pokemon_id):
        """Patch one Pokémon's sprite columns; returns the values written."""
        data = self.fetcher.get(self.fetcher.url_for('pokemon', pokemon_id))
        sprites = pick_sprites(data.get('sprites') or {})

        changes = dict(
            (column, sprites[column]) for column in SPRITE_COLUMNS
            if sprites[column])
        if changes:
            (self.session.query(tables.Pokemon)
                .filter(tables.Pokemon.id == pokemon_id)
                .update(changes, synchronize_session=False))
        self.session.commit()
        return changes
