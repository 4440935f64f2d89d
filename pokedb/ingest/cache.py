u"""Resolve-or-create for the global reference tables.

Types, moves, abilities and egg groups are shared by many Pokémon.  The
EntityCache makes sure each is fetched and inserted at most once per run:

    cache = EntityCache(session, fetcher)
    type_id = cache.resolve('type', 'fire', type_url)

Lookups go to the database first, then to the run's memory, and only then to
the catalog.  This is a check-then-insert and is only safe with a single
writer.
"""

import logging

from pokedb.db import tables
from pokedb.ingest import commit
from pokedb.ingest.payload import english_text

log = logging.getLogger(__name__)


def _names(relations):
    return [relation['name'] for relation in relations]

def build_type(cache, data):
    relations = data['damage_relations']
    return tables.Type(
        name=data['name'],
        double_damage_to=_names(relations['double_damage_to']),
        double_damage_from=_names(relations['double_damage_from']),
        half_damage_to=_names(relations['half_damage_to']),
        half_damage_from=_names(relations['half_damage_from']),
        no_damage_to=_names(relations['no_damage_to']),
        no_damage_from=_names(relations['no_damage_from']),
    )

def build_move(cache, data):
    type_id = None
    if data.get('type'):
        type_id = cache.resolve('type', data['type']['name'], data['type']['url'])

    return tables.Move(
        name=data['name'],
        type_id=type_id,
        power=data.get('power'),
        accuracy=data.get('accuracy'),
        pp=data.get('pp'),
        priority=data.get('priority') or 0,
        damage_class=(data.get('damage_class') or {}).get('name'),
        target=(data.get('target') or {}).get('name'),
        effect=english_text(data.get('effect_entries'), 'effect'),
        short_effect=english_text(data.get('effect_entries'), 'short_effect'),
    )

def build_ability(cache, data):
    return tables.Ability(
        name=data['name'],
        effect=english_text(data.get('effect_entries'), 'effect'),
        short_effect=english_text(data.get('effect_entries'), 'short_effect'),
    )


#: kind -> (table, builder).  A builder of None means the name is all there
#: is to the row, so nothing is fetched.
KINDS = {
    'ability': (tables.Ability, build_ability),
    'egg-group': (tables.EggGroup, None),
    'move': (tables.Move, build_move),
    'type': (tables.Type, build_type),
}


class EntityCache(object):
    """Per-run memo of reference rows, keyed by (kind, name).

    `fetch_count` and `insert_count` count the catalog reads and the rows
    created through this cache.
    """

    def __init__(self, session, fetcher):
        self.session = session
        self.fetcher = fetcher
        self._ids = {}
        self.fetch_count = 0
        self.insert_count = 0

    def resolve(self, kind, name, url=None):
        """Return the database ID of the `kind` row called `name`, creating
        it if needed.

        `url` is where the catalog keeps the details; by default it is
        `<kind>/<name>`.
        """
        table, builder = KINDS[kind]

        existing_id = (self.session.query(table.id)
            .filter(table.name == name)
            .scalar())
        if existing_id is not None:
            return existing_id

        key = (kind, name)
        if key in self._ids:
            return self._ids[key]

        if builder is None:
            row = table(name=name)
        else:
            if url is None:
                url = self.fetcher.url_for(kind, name)
            self.fetch_count += 1
            data = self.fetcher.get(url)
            row = builder(self, data)

        self.session.add(row)
        commit(self.session, kind, name)
        self.insert_count += 1
        log.debug("Created %s %s (id %s)", kind, name, row.id)

        self._ids[key] = row.id
        return row.id

    def forget(self):
        """Drop the in-run memory, e.g. after the tables have been cleared."""
        self._ids.clear()
