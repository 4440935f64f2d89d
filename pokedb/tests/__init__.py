u"""Test support code: a fake catalog that stands in for requests.Session.

    catalog = FakeCatalog()
    add_standard_catalog(catalog)
    fetcher = catalog.fetcher()

Every URL the code under test asks for is recorded in `catalog.calls`;
unknown URLs answer 404, like the real catalog.
"""

import copy

import requests

from pokedb.fetch import Fetcher
from pokedb.ingest.pipeline import GENERATION_WINDOWS

API = 'https://pokeapi.test/api/v2'

INVALID_JSON = object()


class FakeResponse(object):
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is INVALID_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return copy.deepcopy(self._payload)


class FakeCatalog(object):
    def __init__(self):
        self.routes = {}
        self.calls = []
        self.sleeps = []

    def fetcher(self):
        return Fetcher(API, session=self, sleep=self.sleeps.append)

    def url_for(self, *parts, **params):
        return Fetcher(API, session=self).url_for(*parts, **params)

    def add(self, url, *responses):
        """Answer `url` with each response in turn, repeating the last one.

        A response is a payload, a FakeResponse, an int status, or an
        exception to raise.
        """
        self.routes[url] = list(responses)

    def get(self, url, timeout=None):
        self.calls.append(url)
        # The catalog answers with or without a trailing slash
        queue = self.routes.get(url)
        if queue is None:
            queue = self.routes.get(url + '/')
        if not queue:
            return FakeResponse(404, {'detail': 'Not found.'})
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return FakeResponse(response, {'detail': 'Error'})
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(200, response)

    def count(self, url):
        return self.calls.count(url)

    def count_prefix(self, prefix):
        return len([url for url in self.calls if url.startswith(API + prefix)])


### Payload builders

def ref(kind, name, id=None):
    return {'name': name, 'url': '%s/%s/%s/' % (API, kind, id or name)}

def english(key, text):
    return {key: text, 'language': {'name': 'en', 'url': API + '/language/9/'}}

def add_type(catalog, name, weak_to=()):
    url = '%s/type/%s/' % (API, name)
    catalog.add(url, {
        'id': len(catalog.routes),
        'name': name,
        'damage_relations': {
            'double_damage_from': [ref('type', t) for t in weak_to],
            'double_damage_to': [],
            'half_damage_from': [],
            'half_damage_to': [],
            'no_damage_from': [],
            'no_damage_to': [],
        },
    })
    return ref('type', name)

def add_type_list(catalog, names):
    catalog.add(catalog.url_for('type', limit=50), {
        'count': len(names),
        'results': [add_type(catalog, name) for name in names],
    })

def add_move(catalog, name, type_name, power=40):
    catalog.add('%s/move/%s/' % (API, name), {
        'name': name,
        'type': ref('type', type_name),
        'power': power,
        'accuracy': 100,
        'pp': 35,
        'priority': 0,
        'damage_class': {'name': 'physical'},
        'target': {'name': 'selected-pokemon'},
        'effect_entries': [
            {'effect': u'Inflicts\nregular damage.', 'short_effect': u'Inflicts regular damage.',
             'language': {'name': 'de'}},
            dict(english('effect', u'Inflicts  regular\fdamage.'),
                 short_effect=u'Inflicts regular damage.'),
        ],
    })

def add_ability(catalog, name):
    catalog.add('%s/ability/%s/' % (API, name), {
        'name': name,
        'effect_entries': [dict(english('effect', u'Does %s things.' % name),
                                short_effect=u'%s.' % name)],
    })

def add_chain(catalog, chain_id, *species_names):
    tree = {}
    node = tree
    for name in species_names:
        node['species'] = ref('pokemon-species', name)
        node['evolution_details'] = []
        child = {}
        node['evolves_to'] = [child]
        node = child
    catalog.add('%s/evolution-chain/%d/' % (API, chain_id),
                {'id': chain_id, 'chain': tree})

def move_entry(name, *version_groups):
    """A move as listed on a Pokémon; version_groups are
    (method, version group, level) tuples.
    """
    return {
        'move': ref('move', name),
        'version_group_details': [
            {'level_learned_at': level,
             'move_learn_method': {'name': method},
             'version_group': {'name': version_group}}
            for method, version_group, level in version_groups],
    }

def add_pokemon(catalog, id, name, types=('normal',), abilities=(), moves=(),
                chain_id=None, evolves_from=None, gender_rate=4, egg_groups=('monster',),
                flavor_texts=None, encounters=None):
    """Register a Pokémon's detail, species and (optionally) encounters.

    Returns the entry the Pokémon list would show for it.
    """
    pokemon_url = '%s/pokemon/%d/' % (API, id)
    species_url = '%s/pokemon-species/%d/' % (API, id)

    sprite_root = 'https://sprites.test/%d' % id
    catalog.add(pokemon_url, {
        'id': id,
        'name': name,
        'height': 7,
        'weight': 69,
        'base_experience': 64,
        'species': {'name': name, 'url': species_url},
        'types': [{'slot': slot, 'type': ref('type', type_name)}
                  for slot, type_name in reversed(list(enumerate(types, 1)))],
        'abilities': [{'ability': ref('ability', ability), 'is_hidden': hidden, 'slot': slot}
                      for ability, hidden, slot in abilities],
        'moves': list(moves),
        'stats': [{'base_stat': 45 + n, 'effort': n % 2, 'stat': {'name': stat}}
                  for n, stat in enumerate(['hp', 'attack', 'defense', 'special-attack',
                                            'special-defense', 'speed'])],
        'sprites': {
            'front_default': sprite_root + '/front.png',
            'front_shiny': sprite_root + '/shiny.png',
            'back_default': sprite_root + '/back.png',
            'back_shiny': None,
            'other': {
                'official-artwork': {'front_default': sprite_root + '/art.png',
                                     'front_shiny': sprite_root + '/art-shiny.png'},
                'home': {'front_default': sprite_root + '/home.png',
                         'front_shiny': sprite_root + '/home-shiny.png'},
            },
            'versions': {
                'generation-vii': {
                    'ultra-sun-ultra-moon': {'front_default': sprite_root + '/usum.png',
                                             'front_shiny': None},
                },
            },
        },
    })

    if flavor_texts is None:
        flavor_texts = [('red', u'A strange seed was\nplanted on its\fback at birth.')]
    catalog.add(species_url, {
        'id': id,
        'name': name,
        'capture_rate': 45,
        'base_happiness': 50,
        'gender_rate': gender_rate,
        'growth_rate': {'name': 'medium-slow'},
        'hatch_counter': 20,
        'habitat': {'name': 'grassland'},
        'color': {'name': 'green'},
        'shape': {'name': 'quadruped'},
        'genera': [{'genus': u'Seed Pokémon', 'language': {'name': 'en'}}],
        'is_baby': False,
        'is_legendary': False,
        'is_mythical': False,
        'evolves_from_species': ref('pokemon-species', evolves_from[1], evolves_from[0])
            if evolves_from else None,
        'evolution_chain': {'url': '%s/evolution-chain/%d/' % (API, chain_id)}
            if chain_id else None,
        'egg_groups': [ref('egg-group', group) for group in egg_groups],
        'flavor_text_entries': [
            {'flavor_text': text, 'language': {'name': language},
             'version': {'name': version}}
            for version, text, language in
            [(t[0], t[1], t[2] if len(t) > 2 else 'en') for t in flavor_texts]],
    })

    if encounters is not None:
        catalog.add(catalog.url_for('pokemon', id, 'encounters'), encounters)

    return {'name': name, 'url': pokemon_url}

def add_generation(catalog, generation, entries):
    offset, limit = GENERATION_WINDOWS[generation - 1]
    catalog.add(catalog.url_for('pokemon', offset=offset, limit=limit),
                {'count': len(entries), 'results': list(entries)})

def add_empty_generations(catalog):
    """Give every generation window not yet registered an empty list."""
    for generation, (offset, limit) in enumerate(GENERATION_WINDOWS, 1):
        url = catalog.url_for('pokemon', offset=offset, limit=limit)
        if url not in catalog.routes:
            add_generation(catalog, generation, [])

def encounter_area(location, *versions):
    return {
        'location_area': {'name': location},
        'version_details': [
            {'version': {'name': version},
             'encounter_details': [
                 {'min_level': level, 'max_level': level + 2, 'chance': 10 * n,
                  'method': {'name': 'walk'}}
                 for n, level in enumerate(levels, 1)]}
            for version, levels in versions],
    }


def add_standard_catalog(catalog):
    u"""A small Kanto: Bulbasaur and Ivysaur share a chain, Pikachu evolves
    from Pichu in generation 2, and only Pikachu has encounters.
    """
    add_type_list(catalog, ['normal', 'grass', 'poison', 'fire', 'electric'])
    for name, type_name in [('tackle', 'normal'), ('vine-whip', 'grass'),
                            ('growl', 'normal'), ('thunder-shock', 'electric')]:
        add_move(catalog, name, type_name)
    for name in ['overgrow', 'chlorophyll', 'static', 'lightning-rod']:
        add_ability(catalog, name)
    add_chain(catalog, 1, 'bulbasaur', 'ivysaur')
    add_chain(catalog, 10, 'pichu', 'pikachu')

    grass_moves = [
        move_entry('tackle', ('level-up', 'red-blue', 1), ('level-up', 'sun-moon', 1)),
        move_entry('vine-whip', ('level-up', 'red-blue', 13)),
        move_entry('growl', ('machine', 'red-blue', 0)),
    ]
    grass_abilities = [('overgrow', False, 1), ('chlorophyll', True, 3)]
    electric_moves = [
        move_entry('thunder-shock', ('level-up', 'sun-moon', 1)),
        move_entry('growl', ('level-up', 'sun-moon', 5)),
    ]
    electric_abilities = [('static', False, 1), ('lightning-rod', True, 3)]

    add_generation(catalog, 1, [
        add_pokemon(catalog, 1, 'bulbasaur', types=('grass', 'poison'),
                    abilities=grass_abilities, moves=grass_moves, chain_id=1,
                    egg_groups=('monster', 'plant'),
                    flavor_texts=[('red', u'A strange seed was\nplanted on its\fback at birth.'),
                                  ('red', u'Duplicate red text.'),
                                  ('blue', u'A strange seed.', 'fr'),
                                  ('yellow', u'It can go for days\n without eating.')]),
        add_pokemon(catalog, 2, 'ivysaur', types=('grass', 'poison'),
                    abilities=grass_abilities, moves=grass_moves, chain_id=1,
                    evolves_from=(1, 'bulbasaur'), egg_groups=('monster', 'plant')),
        add_pokemon(catalog, 25, 'pikachu', types=('electric',),
                    abilities=electric_abilities, moves=electric_moves, chain_id=10,
                    evolves_from=(172, 'pichu'), egg_groups=('ground', 'fairy'),
                    encounters=[
                        encounter_area('viridian-forest-area',
                                       ('red', [3, 5]), ('blue', [3])),
                        encounter_area('power-plant-area', ('yellow', [20])),
                    ]),
    ])
    add_generation(catalog, 2, [
        add_pokemon(catalog, 172, 'pichu', types=('electric',),
                    abilities=electric_abilities, moves=electric_moves[:1], chain_id=10,
                    gender_rate=4, egg_groups=('no-eggs',)),
    ])
    add_empty_generations(catalog)


def connection_error(url):
    return requests.ConnectionError("Connection refused: %s" % url)
