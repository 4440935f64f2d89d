u"""Seeding one Pokémon and everything it owns."""

import logging

from pokedb.db import tables
from pokedb.ingest import commit
from pokedb.ingest.chains import ChainResolver
from pokedb.ingest.payload import (
    english_flavor_texts, english_text, id_from_url, pick_sprites)
from pokedb.ingest.relations import AbilityIngestor, EncounterIngestor, MoveIngestor
from pokedb.ingest.report import SubjectResult

log = logging.getLogger(__name__)

#: At most this many stats and Pokédex entries are stored per Pokémon
STAT_LIMIT = 6
POKEDEX_ENTRY_LIMIT = 10


class SpeciesIngestor(object):
    u"""Seeds a Pokémon from its detail and species payloads.

    The Pokémon row, its type and egg group links, stats and Pokédex entries
    are committed together.  Abilities, moves and encounters follow, each
    isolated by its own ingestor.

    Errors from the first part propagate; the caller decides what a failed
    Pokémon means for the run.
    """

    def __init__(self, session, fetcher, cache, progress=None):
        self.session = session
        self.fetcher = fetcher
        self.cache = cache
        self.chains = ChainResolver(session, fetcher)
        self.abilities = AbilityIngestor(session, cache)
        self.moves = MoveIngestor(session, cache)
        self.encounters = EncounterIngestor(session, fetcher)
        self.progress = progress or (lambda msg: None)

    def ingest(self, url, generation):
        data = self.fetcher.get(url)
        species = self.fetcher.get(data['species']['url'])

        result = SubjectResult(data['id'], data['name'])
        pokemon = self.build_pokemon(data, species, generation)
        self.session.add(pokemon)
        commit(self.session, 'pokemon', data['id'])

        self.progress('abilities')
        result.units.extend(self.abilities.ingest(data['id'], data))
        self.progress('moves')
        result.units.extend(self.moves.ingest(data['id'], data))
        self.progress('encounters')
        result.units.extend(self.encounters.ingest(data['id'], data))
        return result

    def build_pokemon(self, data, species, generation):
        """Resolve a Pokémon's references and return its unsaved row."""
        evolution_chain_id = None
        if (species.get('evolution_chain') or {}).get('url'):
            chain_url = species['evolution_chain']['url']
            evolution_chain_id = id_from_url(chain_url)
            self.chains.ensure_chain(evolution_chain_id, chain_url)

        evolves_from_id = None
        if species.get('evolves_from_species'):
            evolves_from_id = id_from_url(species['evolves_from_species']['url'])

        type_links = []
        for entry in sorted(data.get('types', ()), key=lambda t: t['slot']):
            type_id = self.cache.resolve('type', entry['type']['name'], entry['type']['url'])
            type_links.append(tables.PokemonType(slot=entry['slot'], type_id=type_id))

        egg_group_links = []
        for egg_group in species.get('egg_groups', ()):
            egg_group_id = self.cache.resolve('egg-group', egg_group['name'])
            egg_group_links.append(tables.PokemonEggGroup(egg_group_id=egg_group_id))

        pokemon = tables.Pokemon(
            id=data['id'],
            name=data['name'],
            generation=generation,
            height=data.get('height'),
            weight=data.get('weight'),
            base_experience=data.get('base_experience'),
            capture_rate=species.get('capture_rate'),
            base_happiness=species.get('base_happiness'),
            gender_rate=species.get('gender_rate'),
            growth_rate=(species.get('growth_rate') or {}).get('name'),
            hatch_counter=species.get('hatch_counter'),
            habitat=(species.get('habitat') or {}).get('name'),
            color=(species.get('color') or {}).get('name'),
            shape=(species.get('shape') or {}).get('name'),
            genus=english_text(species.get('genera'), 'genus'),
            is_baby=bool(species.get('is_baby')),
            is_legendary=bool(species.get('is_legendary')),
            is_mythical=bool(species.get('is_mythical')),
            evolves_from_id=evolves_from_id,
            evolution_chain_id=evolution_chain_id,
            pokemon_types=type_links,
            pokemon_egg_groups=egg_group_links,
            **pick_sprites(data.get('sprites') or {})
        )

        seen_stats = set()
        for entry in data.get('stats', ()):
            name = entry['stat']['name']
            if name in seen_stats or len(seen_stats) >= STAT_LIMIT:
                continue
            seen_stats.add(name)
            pokemon.stats.append(tables.Stat(
                name=name, value=entry['base_stat'], effort=entry.get('effort', 0)))

        flavor_texts = english_flavor_texts(
            species.get('flavor_text_entries'), limit=POKEDEX_ENTRY_LIMIT)
        for version, description in flavor_texts:
            pokemon.pokedex_entries.append(
                tables.PokedexEntry(version=version, description=description))

        return pokemon
