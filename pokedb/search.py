from sqlalchemy import func
from sqlalchemy.orm import selectinload

import pokedb.db.tables as t

SEARCH_LIMIT = 10


def search(session, query, limit=SEARCH_LIMIT):
    """Find Pokémon for the search box.

    A number matches the Pokémon with exactly that ID; anything else matches
    Pokémon whose name or any of whose type names contain it.  Case doesn't
    matter.  Results are in ID order.
    """
    query = query.strip().lower()
    if not query:
        return []

    q = (
        session.query(t.Pokemon)
        .options(
            selectinload(t.Pokemon.pokemon_types).joinedload(t.PokemonType.type)
        )
    )

    if query.isdecimal():
        q = q.filter(t.Pokemon.id == int(query))
    else:
        type_match = t.Pokemon.pokemon_types.any(
            t.PokemonType.type.has(
                func.lower(t.Type.name).contains(query, autoescape=True)))
        name_match = func.lower(t.Pokemon.name).contains(query, autoescape=True)
        q = q.filter(name_match | type_match)

    return q.order_by(t.Pokemon.id).limit(limit).all()
