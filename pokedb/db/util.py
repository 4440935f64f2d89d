"""Helpers for common ways to work with pokedb queries

These are the reads the site makes against a seeded database: Pokémon by
generation, and a single Pokémon with everything shown on its page.
"""

from sqlalchemy.orm import joinedload, selectinload
from sqlalchemy.orm.exc import NoResultFound

from pokedb.db import tables

### Getter

def get(session, table, name=None, id=None):
    """Get one object from the database.

    session: The session to use (from pokedb.db.connect())
    table: The table to select from (such as pokedb.db.tables.Move)

    name: The name of the object
    id: The ID number of the object

    If zero or more than one objects matching the criteria are found, the
    appropriate SQLAlchemy exception is raised.
    """

    query = session.query(table)

    if name is not None:
        query = query.filter_by(name=name)

    if id is not None:
        # ASSUMPTION: id is the primary key of the table.
        result = session.get(table, id)
        if result is None:
            # Keep the API
            raise NoResultFound
        else:
            return result

    return query.one()

### Pokémon pages

def _with_types_and_stats(query):
    return query.options(
        selectinload(tables.Pokemon.pokemon_types).joinedload(tables.PokemonType.type),
        selectinload(tables.Pokemon.stats),
    )

def pokemon_by_generation(session, generation=None):
    """All Pokémon seeded from one generation, or every Pokémon if
    `generation` is None; in ID order, with their types and stats loaded.
    """
    query = session.query(tables.Pokemon)
    if generation is not None:
        query = query.filter_by(generation=generation)
    query = _with_types_and_stats(query)
    return query.order_by(tables.Pokemon.id).all()

def get_pokemon(session, id):
    """One Pokémon with its types, stats and Pokédex entries loaded.

    Raises NoResultFound if there is no such Pokémon.
    """
    query = session.query(tables.Pokemon).filter_by(id=id)
    query = _with_types_and_stats(query)
    query = query.options(
        selectinload(tables.Pokemon.pokedex_entries),
        joinedload(tables.Pokemon.evolution_chain),
    )
    return query.one()
