u"""Linking abilities, moves and encounters to one Pokémon.

Each ingestor takes the Pokémon's detail payload and returns a list of
UnitResults.  A failing unit is rolled back, logged and skipped; it never
stops its siblings.
"""

import logging

from pokedb.db import tables
from pokedb.fetch import FetchError
from pokedb.ingest import commit
from pokedb.ingest.report import UnitResult

log = logging.getLogger(__name__)

#: Only this many of a Pokémon's moves are linked
MOVE_LIMIT = 50

#: Encounters are capped at this many location areas, versions per area, and
#: details per version
ENCOUNTER_AREA_LIMIT = 20
ENCOUNTER_VERSION_LIMIT = 3
ENCOUNTER_DETAIL_LIMIT = 2


class AbilityIngestor(object):
    def __init__(self, session, cache):
        self.session = session
        self.cache = cache

    def ingest(self, pokemon_id, data):
        results = []
        for entry in data.get('abilities', ()):
            # Malformed entries are skipped like any other failing unit
            name = (entry.get('ability') or {}).get('name')
            try:
                ability_id = self.cache.resolve('ability', name, entry['ability']['url'])
                self.session.add(tables.PokemonAbility(
                    pokemon_id=pokemon_id,
                    ability_id=ability_id,
                    is_hidden=bool(entry.get('is_hidden')),
                    slot=entry['slot'],
                ))
                commit(self.session, 'pokemon-ability', (pokemon_id, entry['slot']))
            except Exception as e:
                self.session.rollback()
                log.warning("Pokemon %s: skipping ability %s: %s", pokemon_id, name, e)
                results.append(UnitResult.skipped('ability', name, e))
            else:
                results.append(UnitResult.done('ability', name))
        return results


class MoveIngestor(object):
    u"""Links up to MOVE_LIMIT moves to a Pokémon.

    Of each move's version group details, only the last (the most recent
    game) is kept.  A link that already exists is left alone.
    """

    def __init__(self, session, cache, limit=MOVE_LIMIT):
        self.session = session
        self.cache = cache
        self.limit = limit

    def ingest(self, pokemon_id, data):
        results = []
        for entry in data.get('moves', ())[:self.limit]:
            name = (entry.get('move') or {}).get('name')
            try:
                self._link(pokemon_id, entry)
            except Exception as e:
                self.session.rollback()
                log.warning("Pokemon %s: skipping move %s: %s", pokemon_id, name, e)
                results.append(UnitResult.skipped('move', name, e))
            else:
                results.append(UnitResult.done('move', name))
        return results

    def _link(self, pokemon_id, entry):
        move_id = self.cache.resolve('move', entry['move']['name'], entry['move']['url'])

        details = entry.get('version_group_details')
        if not details:
            return
        detail = details[-1]
        learn_method = detail['move_learn_method']['name']
        version_group = detail['version_group']['name']

        existing = (self.session.query(tables.PokemonMove)
            .filter_by(pokemon_id=pokemon_id, move_id=move_id,
                       learn_method=learn_method, version_group=version_group)
            .first())
        if existing is not None:
            return

        self.session.add(tables.PokemonMove(
            pokemon_id=pokemon_id,
            move_id=move_id,
            learn_method=learn_method,
            version_group=version_group,
            level_learned=detail.get('level_learned_at') or None,
        ))
        commit(self.session, 'pokemon-move',
               (pokemon_id, move_id, learn_method, version_group))


class EncounterIngestor(object):
    u"""Stores where a Pokémon can be found in the wild.

    Best effort: if the encounter list can't be fetched, the Pokémon simply
    has no encounters.
    """

    def __init__(self, session, fetcher):
        self.session = session
        self.fetcher = fetcher

    def ingest(self, pokemon_id, data=None):
        url = self.fetcher.url_for('pokemon', pokemon_id, 'encounters')
        try:
            areas = self.fetcher.get(url)
        except FetchError as e:
            log.info("Pokemon %s: no encounters (%s)", pokemon_id, e)
            return [UnitResult.done('encounters', pokemon_id)]

        try:
            count = 0
            for area in areas[:ENCOUNTER_AREA_LIMIT]:
                for version in area['version_details'][:ENCOUNTER_VERSION_LIMIT]:
                    for detail in version['encounter_details'][:ENCOUNTER_DETAIL_LIMIT]:
                        self.session.add(tables.Encounter(
                            pokemon_id=pokemon_id,
                            location_name=area['location_area']['name'],
                            version_name=version['version']['name'],
                            method=detail['method']['name'],
                            min_level=detail['min_level'],
                            max_level=detail['max_level'],
                            chance=detail['chance'],
                        ))
                        count += 1
            commit(self.session, 'encounters', pokemon_id)
        except Exception as e:
            self.session.rollback()
            log.warning("Pokemon %s: skipping encounters: %s", pokemon_id, e)
            return [UnitResult.skipped('encounters', pokemon_id, e)]

        log.debug("Pokemon %s: %d encounters", pokemon_id, count)
        return [UnitResult.done('encounters', pokemon_id)]
