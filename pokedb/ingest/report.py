"""Outcomes of a seeding run.

Every unit of work (one ability link, one move link, a Pokémon's encounters,
a sprite patch) produces a UnitResult.  A Pokémon's results are grouped in a
SubjectResult, and a run's in a RunReport.
"""

from collections import namedtuple


class UnitResult(namedtuple('UnitResult', 'kind key reason')):
    """The outcome of one unit of work: done if `reason` is None, otherwise
    skipped for that reason.
    """
    __slots__ = ()

    @classmethod
    def done(cls, kind, key):
        return cls(kind, key, None)

    @classmethod
    def skipped(cls, kind, key, reason):
        return cls(kind, key, str(reason))

    @property
    def ok(self):
        return self.reason is None


class SubjectResult(object):
    """The outcome of seeding (or refreshing) one Pokémon."""

    def __init__(self, pokemon_id, name, error=None):
        self.pokemon_id = pokemon_id
        self.name = name
        self.error = error
        self.units = []

    @property
    def ok(self):
        return self.error is None

    @property
    def skipped_units(self):
        return [unit for unit in self.units if not unit.ok]

    def __repr__(self):
        if self.ok:
            return "<SubjectResult %s: ok>" % (self.name,)
        return "<SubjectResult %s: %s>" % (self.name, self.error)


class RunReport(object):
    """Everything that happened during one run."""

    def __init__(self):
        self.subjects = []

    def add(self, result):
        self.subjects.append(result)
        return result

    @property
    def succeeded(self):
        return [s for s in self.subjects if s.ok]

    @property
    def failed(self):
        return [s for s in self.subjects if not s.ok]

    @property
    def skipped_units(self):
        return [(s, unit) for s in self.subjects for unit in s.skipped_units]

    def summary(self):
        return u"%d ok, %d failed, %d sub-resources skipped" % (
            len(self.succeeded), len(self.failed), len(self.skipped_units))
