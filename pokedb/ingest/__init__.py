"""Seeding the database from the remote catalog.

The pieces, from the bottom up:

- `cache.EntityCache` resolves types, moves, abilities and egg groups by name,
  creating each at most once per run;
- `chains.ChainResolver` stores evolution chains;
- `relations` links abilities, moves and encounters to one Pokémon;
- `species.SpeciesIngestor` seeds one Pokémon with everything it owns;
- `pipeline.PipelineOrchestrator` runs a full reseed;
- `sprites.SpriteRefresher` patches sprite columns of existing rows.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError


class IngestError(Exception):
    """Base class for seeding errors that are not fetch errors."""

class ConstraintViolation(IngestError):
    """An insert broke a uniqueness invariant; this points at a dedup bug or
    malformed catalog data.
    """
    def __init__(self, kind, key, orig):
        super(ConstraintViolation, self).__init__(
            u"duplicate %s %s (%s)" % (kind, key, orig))
        self.kind = kind
        self.key = key
        self.orig = orig

class FatalOrchestrationError(IngestError):
    """A failure that makes the rest of the run pointless."""
    def __init__(self, state, cause):
        super(FatalOrchestrationError, self).__init__(
            u"%s failed: %s" % (state, cause))
        self.state = state
        self.cause = cause


def commit(session, kind, key):
    """Commit the session, turning a uniqueness failure into a
    ConstraintViolation.  The session is rolled back on failure.
    """
    try:
        session.commit()
    except (IntegrityError, FlushError) as e:
        session.rollback()
        raise ConstraintViolation(kind, key, getattr(e, 'orig', e))
