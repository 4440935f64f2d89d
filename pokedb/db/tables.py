# encoding: utf8

u"""The PokeDB schema.

Rows fall into three groups:

- global reference tables, keyed by a natural `name` and written at most once
  per name by the seeder: Ability, EggGroup, Move, Type;
- Pokemon, keyed by the catalog's own numeric ID, and EvolutionChain, keyed
  by the catalog's chain ID;
- rows owned by exactly one Pokémon: Encounter, PokedexEntry, PokemonAbility,
  PokemonEggGroup, PokemonMove, PokemonType, Stat.

Owned rows must be deleted before their Pokémon, and Pokémon before the
reference tables; see `pokedb.ingest.pipeline.CLEAR_ORDER`.
"""

from sqlalchemy import Column, ForeignKey, MetaData, UniqueConstraint
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import DeclarativeMeta, declarative_base, foreign, relationship, remote
from sqlalchemy.types import JSON, Boolean, Integer, SmallInteger, Unicode, UnicodeText


class TableSuperclass(object):
    """Superclass for declarative tables, to give them some generic niceties
    like stringification.
    """
    def __str__(self):
        """Be as useful as possible.  Show the primary key, and a name if
        we've got one.
        """
        typename = u'.'.join((__name__, type(self).__name__))

        pk_constraint = self.__table__.primary_key
        if not pk_constraint:
            return u"<%s object at %x>" % (typename, id(self))

        pk = u', '.join(str(getattr(self, column.name))
            for column in pk_constraint.columns)
        try:
            return u"<%s object (%s): %s>" % (typename, pk, self.name)
        except AttributeError:
            return u"<%s object (%s)>" % (typename, pk)

    def __repr__(self):
        return str(self)

mapped_classes = []
class TableMetaclass(DeclarativeMeta):
    def __init__(cls, name, bases, attrs):
        super(TableMetaclass, cls).__init__(name, bases, attrs)
        if hasattr(cls, '__tablename__'):
            mapped_classes.append(cls)

metadata = MetaData()
TableBase = declarative_base(metadata=metadata, cls=TableSuperclass, metaclass=TableMetaclass)


### The actual tables

class Ability(TableBase):
    u"""An ability a Pokémon can have, such as Static or Pressure."""
    __tablename__ = 'abilities'
    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(Unicode(79), nullable=False, unique=True,
        doc=u"The catalog name, e.g. 'run-away'")
    effect = Column(UnicodeText, nullable=True,
        doc=u"A detailed description of this ability's effect")
    short_effect = Column(UnicodeText, nullable=True,
        doc=u"A short summary of this ability's effect")

class EggGroup(TableBase):
    u"""An Egg group. Usually, two Pokémon can breed if they share an Egg Group."""
    __tablename__ = 'egg_groups'
    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(Unicode(79), nullable=False, unique=True,
        doc=u"The catalog name, e.g. 'monster'")

class Encounter(TableBase):
    u"""A way to meet a wild Pokémon: where, in which game, how, and at what
    levels.

    Denormalized; the location and version are stored by name.
    """
    __tablename__ = 'encounters'
    id = Column(Integer, primary_key=True, nullable=False,
        doc=u"A unique ID for this encounter")
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc=u"The ID of the encountered Pokémon")
    location_name = Column(Unicode(79), nullable=False,
        doc=u"Name of the location area")
    version_name = Column(Unicode(79), nullable=False,
        doc=u"Name of the game version")
    method = Column(Unicode(79), nullable=False,
        doc=u"Encounter method, e.g. 'walk' or 'old-rod'")
    min_level = Column(Integer, nullable=False,
        doc=u"The minimum level of the encountered Pokémon")
    max_level = Column(Integer, nullable=False,
        doc=u"The maximum level of the encountered Pokémon")
    chance = Column(Integer, nullable=False,
        doc=u"The chance of the encounter as a percentage")

class EvolutionChain(TableBase):
    u"""A family of Pokémon that are linked by evolution.

    The tree is kept exactly as the catalog returns it.
    """
    __tablename__ = 'evolution_chains'
    id = Column(Integer, primary_key=True, nullable=False, autoincrement=False,
        doc=u"The catalog's chain ID")
    chain = Column(JSON, nullable=False,
        doc=u"Nested tree of species, evolution details and children")

class Move(TableBase):
    u"""A Move: technique or attack a Pokémon can learn to use."""
    __tablename__ = 'moves'
    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(Unicode(79), nullable=False, unique=True,
        doc=u"The catalog name, e.g. 'thunder-shock'")
    type_id = Column(Integer, ForeignKey('types.id'), nullable=True,
        doc=u"ID of the move's elemental type")
    power = Column(SmallInteger, nullable=True,
        doc=u"Base power of the move, null if it does not have a set base power.")
    accuracy = Column(SmallInteger, nullable=True,
        doc=u"Accuracy of the move; NULL means it never misses")
    pp = Column(SmallInteger, nullable=True,
        doc=u"Base PP (Power Points) of the move")
    priority = Column(SmallInteger, nullable=False, default=0,
        doc=u"The move's priority bracket")
    damage_class = Column(Unicode(79), nullable=True,
        doc=u"physical, special or status")
    target = Column(Unicode(79), nullable=True,
        doc=u"Name of the move's target, e.g. 'selected-pokemon'")
    effect = Column(UnicodeText, nullable=True,
        doc=u"A detailed description of this move's effect")
    short_effect = Column(UnicodeText, nullable=True,
        doc=u"A short summary of this move's effect")

class PokedexEntry(TableBase):
    u"""A Pokédex description of a Pokémon, as shown in one game."""
    __tablename__ = 'pokedex_entries'
    id = Column(Integer, primary_key=True, nullable=False)
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc=u"ID of the Pokémon")
    version = Column(Unicode(79), nullable=False,
        doc=u"Name of the game version the text is taken from")
    description = Column(UnicodeText, nullable=False,
        doc=u"The flavor text, with whitespace normalized")

    __table_args__ = (
        UniqueConstraint(pokemon_id, version),
        {},
    )

class Pokemon(TableBase):
    u"""A Pokémon.  The core to this whole mess.

    IDs match the catalog's IDs and never change.  Species-level data
    (breeding, Pokédex color, and so on) is flattened onto this table.
    """
    __tablename__ = 'pokemon'
    id = Column(Integer, primary_key=True, nullable=False, autoincrement=False)
    name = Column(Unicode(79), nullable=False, index=True,
        doc=u"The catalog name, including form if any")
    generation = Column(Integer, nullable=False, index=True,
        doc=u"The generation window this Pokémon was seeded from")

    sprite = Column(Unicode(255), nullable=False, default=u'')
    sprite_shiny = Column(Unicode(255), nullable=True)
    sprite_back = Column(Unicode(255), nullable=True)
    sprite_back_shiny = Column(Unicode(255), nullable=True)
    sprite_artwork = Column(Unicode(255), nullable=True)
    sprite_artwork_shiny = Column(Unicode(255), nullable=True)
    sprite_home = Column(Unicode(255), nullable=True)
    sprite_home_shiny = Column(Unicode(255), nullable=True)

    height = Column(Integer, nullable=True,
        doc=u"The height of the Pokémon, in tenths of a meter (decimeters)")
    weight = Column(Integer, nullable=True,
        doc=u"The weight of the Pokémon, in tenths of a kilogram (hectograms)")
    base_experience = Column(Integer, nullable=True,
        doc=u"The base EXP gained when defeating this Pokémon")

    capture_rate = Column(Integer, nullable=True,
        doc=u"The base capture rate; up to 255")
    base_happiness = Column(Integer, nullable=True,
        doc=u"The tameness when caught by a normal ball")
    gender_rate = Column(Integer, nullable=True,
        doc=u"The chance of this Pokémon being female, in eighths; or -1 for genderless")
    growth_rate = Column(Unicode(79), nullable=True,
        doc=u"Name of the experience curve, e.g. 'medium-slow'")
    hatch_counter = Column(Integer, nullable=True,
        doc=u"Initial hatch counter: one must walk 255 × (hatch_counter + 1) steps before this Pokémon's egg hatches")

    habitat = Column(Unicode(79), nullable=True)
    color = Column(Unicode(79), nullable=True)
    shape = Column(Unicode(79), nullable=True)
    genus = Column(Unicode(79), nullable=True,
        doc=u"The English genus, e.g. 'Seed Pokémon'")

    is_baby = Column(Boolean, nullable=False, default=False)
    is_legendary = Column(Boolean, nullable=False, default=False)
    is_mythical = Column(Boolean, nullable=False, default=False)

    evolves_from_id = Column(Integer, nullable=True,
        doc=u"ID of the Pokémon this one evolves from.  Not a foreign key: the "
            u"pre-evolution may belong to a later generation window.")
    evolution_chain_id = Column(Integer, ForeignKey('evolution_chains.id'), nullable=True,
        doc=u"ID of the evolution chain this Pokémon belongs to")

    @property
    def is_genderless(self):
        return self.gender_rate == -1

    @property
    def female_rate(self):
        u"""Percentage of females, or None for genderless Pokémon."""
        if self.gender_rate is None or self.is_genderless:
            return None
        return self.gender_rate / 8 * 100

    @property
    def male_rate(self):
        female_rate = self.female_rate
        if female_rate is None:
            return None
        return 100 - female_rate

    def base_stat(self, stat_name, default=0):
        u"""Return this Pokemon's base stat value for the given stat name,
        or default if missing.
        """
        for stat in self.stats:
            if stat.name == stat_name:
                return stat.value

        return default

class PokemonAbility(TableBase):
    u"""Maps an ability to a Pokémon that can have it."""
    __tablename__ = 'pokemon_abilities'
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), primary_key=True, nullable=False, autoincrement=False,
        doc=u"ID of the Pokémon")
    slot = Column(Integer, primary_key=True, nullable=False, autoincrement=False,
        doc=u"The ability slot; hidden abilities usually take slot 3")
    ability_id = Column(Integer, ForeignKey('abilities.id'), nullable=False, index=True,
        doc=u"ID of the ability")
    is_hidden = Column(Boolean, nullable=False,
        doc=u"Whether this is a hidden ability")

class PokemonEggGroup(TableBase):
    u"""Maps an Egg group to a Pokémon; each belongs to one or two egg groups."""
    __tablename__ = 'pokemon_egg_groups'
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), primary_key=True, nullable=False, autoincrement=False,
        doc=u"ID of the Pokémon")
    egg_group_id = Column(Integer, ForeignKey('egg_groups.id'), primary_key=True, nullable=False, autoincrement=False,
        doc=u"ID of the egg group")

class PokemonMove(TableBase):
    u"""Record of a move a Pokémon can learn.

    Only the most recent version group the catalog lists for a move is kept.
    """
    __tablename__ = 'pokemon_moves'
    id = Column(Integer, primary_key=True, nullable=False)
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc=u"ID of the Pokémon")
    move_id = Column(Integer, ForeignKey('moves.id'), nullable=False, index=True,
        doc=u"ID of the move")
    learn_method = Column(Unicode(79), nullable=False,
        doc=u"How the move is learned, e.g. 'level-up' or 'machine'")
    version_group = Column(Unicode(79), nullable=False,
        doc=u"Name of the version group this applies to")
    level_learned = Column(Integer, nullable=True,
        doc=u"Level the move is learned at, if applicable")

    __table_args__ = (
        UniqueConstraint(pokemon_id, move_id, learn_method, version_group),
        {},
    )

class PokemonType(TableBase):
    u"""Maps a type to a Pokémon. Each Pokémon has 1 or 2 types."""
    __tablename__ = 'pokemon_types'
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), primary_key=True, nullable=False, autoincrement=False,
        doc=u"ID of the Pokémon")
    slot = Column(Integer, primary_key=True, nullable=False, autoincrement=False,
        doc=u"The type's slot, 1 or 2, used to sort types if there are two of them")
    type_id = Column(Integer, ForeignKey('types.id'), nullable=False,
        doc=u"ID of the type")

class Stat(TableBase):
    u"""A base stat of a Pokémon, e.g. its base Speed."""
    __tablename__ = 'stats'
    id = Column(Integer, primary_key=True, nullable=False)
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc=u"ID of the Pokémon")
    name = Column(Unicode(79), nullable=False,
        doc=u"The stat name, e.g. 'special-attack'")
    value = Column(Integer, nullable=False,
        doc=u"The base stat")
    effort = Column(Integer, nullable=False,
        doc=u"The effort increase in this stat gained when this Pokémon is defeated")

    __table_args__ = (
        UniqueConstraint(pokemon_id, name),
        {},
    )

class Type(TableBase):
    u"""Any of the elemental types Pokémon and moves can have.

    Damage relations are lists of type names.
    """
    __tablename__ = 'types'
    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(Unicode(79), nullable=False, unique=True,
        doc=u"The catalog name, e.g. 'fire'")
    double_damage_to = Column(JSON, nullable=False)
    double_damage_from = Column(JSON, nullable=False)
    half_damage_to = Column(JSON, nullable=False)
    half_damage_from = Column(JSON, nullable=False)
    no_damage_to = Column(JSON, nullable=False)
    no_damage_from = Column(JSON, nullable=False)


### Relationships down here, to avoid dependency ordering problems

Encounter.pokemon = relationship(Pokemon,
    back_populates='encounters')

EvolutionChain.pokemon = relationship(Pokemon,
    order_by=Pokemon.id,
    back_populates='evolution_chain')

Move.type = relationship(Type,
    innerjoin=False,
    backref='moves')

PokedexEntry.pokemon = relationship(Pokemon,
    back_populates='pokedex_entries')

Pokemon.encounters = relationship(Encounter,
    order_by=Encounter.id,
    cascade='all, delete-orphan',
    back_populates='pokemon')
Pokemon.evolution_chain = relationship(EvolutionChain,
    back_populates='pokemon')
Pokemon.evolves_from = relationship(Pokemon,
    primaryjoin=foreign(Pokemon.evolves_from_id) == remote(Pokemon.id),
    uselist=False, viewonly=True)
Pokemon.pokedex_entries = relationship(PokedexEntry,
    order_by=PokedexEntry.id,
    cascade='all, delete-orphan',
    back_populates='pokemon')
Pokemon.pokemon_abilities = relationship(PokemonAbility,
    order_by=PokemonAbility.slot,
    cascade='all, delete-orphan',
    backref='pokemon')
Pokemon.abilities = association_proxy('pokemon_abilities', 'ability')
Pokemon.pokemon_egg_groups = relationship(PokemonEggGroup,
    cascade='all, delete-orphan',
    backref='pokemon')
Pokemon.egg_groups = association_proxy('pokemon_egg_groups', 'egg_group')
Pokemon.pokemon_moves = relationship(PokemonMove,
    order_by=PokemonMove.id,
    cascade='all, delete-orphan',
    backref='pokemon')
Pokemon.pokemon_types = relationship(PokemonType,
    order_by=PokemonType.slot,
    cascade='all, delete-orphan',
    backref='pokemon')
Pokemon.types = association_proxy('pokemon_types', 'type')
Pokemon.stats = relationship(Stat,
    order_by=Stat.id,
    cascade='all, delete-orphan',
    backref='pokemon')

PokemonAbility.ability = relationship(Ability,
    innerjoin=True, lazy='joined')

PokemonEggGroup.egg_group = relationship(EggGroup,
    innerjoin=True, lazy='joined')

PokemonMove.move = relationship(Move,
    innerjoin=True, lazy='joined')

PokemonType.type = relationship(Type,
    innerjoin=True, lazy='joined')
