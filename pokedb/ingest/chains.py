"""Evolution chains, stored once per catalog chain ID."""

import logging

from pokedb.db import tables
from pokedb.ingest import commit

log = logging.getLogger(__name__)


class ChainResolver(object):
    def __init__(self, session, fetcher):
        self.session = session
        self.fetcher = fetcher

    def ensure_chain(self, chain_id, chain_url):
        """Store evolution chain `chain_id` unless it is already stored.

        Returns True if a new row was created.  Existing chains are never
        touched.
        """
        if self.session.get(tables.EvolutionChain, chain_id) is not None:
            return False

        data = self.fetcher.get(chain_url)
        self.session.add(tables.EvolutionChain(id=chain_id, chain=data['chain']))
        commit(self.session, 'evolution-chain', chain_id)
        log.debug("Created evolution chain %s", chain_id)
        return True
