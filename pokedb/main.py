# encoding: utf8
import argparse
import logging
import sys

from sqlalchemy import inspect

import pokedb.cli.search
import pokedb.db
import pokedb.db.tables
from pokedb import defaults
from pokedb.fetch import Fetcher
from pokedb.ingest import FatalOrchestrationError
from pokedb.ingest.pipeline import CLEAR_ORDER, PipelineOrchestrator
from pokedb.ingest.sprites import SpriteRefresher
from pokedb.progress import ProgressPrinter


def main(junk, *argv):
    parser = create_parser()

    if len(argv) <= 0:
        parser.print_help()
        sys.exit()

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')
    args.func(parser, args)


def setuptools_entry():
    main(*sys.argv)

def seed_entry():
    main(sys.argv[0], 'seed', *sys.argv[1:])

def refresh_sprites_entry():
    main(sys.argv[0], 'refresh-sprites', *sys.argv[1:])


def create_parser():
    """Build and return an ArgumentParser.
    """
    # Slightly clumsy workaround to make both `seed -v` and `-v seed` work
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument(
        '-e', '--engine', dest='engine_uri', default=None,
        help=u'By default, all commands use a SQLite database in the '
            u'current directory.  Use this option (or a POKEDB_DB_ENGINE '
            u'environment variable) to specify an alternate database.',
        )
    common_parser.add_argument(
        '-a', '--api', dest='api_url', default=None,
        help=u'Root URL of the catalog API.  Use this option (or a '
            u'POKEDB_API_URL environment variable) to point at a mirror.',
    )
    common_parser.add_argument(
        '-q', '--quiet', dest='verbose', action='store_false',
        help=u'Don\'t print progress output.',
    )
    common_parser.add_argument(
        '-v', '--verbose', dest='verbose', default=False, action='store_true',
        help=u'Print progress output.  This is the default for seed and '
            u'refresh-sprites.',
    )

    parser = argparse.ArgumentParser(
        prog='pokedb', description=u'Seeds a Pokédex database from PokeAPI',
        parents=[common_parser],
    )

    cmds = parser.add_subparsers(title='commands', metavar='<command>', help='commands')
    cmd_help = cmds.add_parser(
        'help', help=u'Display this message',
        parents=[common_parser])
    cmd_help.set_defaults(func=command_help)

    cmd_seed = cmds.add_parser(
        'seed', help=u'Delete everything and reseed from the catalog',
        parents=[common_parser])
    cmd_seed.set_defaults(func=command_seed, verbose=True)

    cmd_sprites = cmds.add_parser(
        'refresh-sprites', help=u'Refetch shiny sprites for seeded Pokémon',
        parents=[common_parser])
    cmd_sprites.set_defaults(func=command_refresh_sprites, verbose=True)

    cmd_search = cmds.add_parser(
        'search', help=u'Find Pokémon by ID, name or type',
        parents=[common_parser])
    pokedb.cli.search.configure_parser(cmd_search)

    cmd_status = cmds.add_parser(
        'status', help=u'Print which database and catalog would be used, and what the database holds',
        parents=[common_parser])
    cmd_status.set_defaults(func=command_status, verbose=True)

    return parser


def get_session(args):
    """Given a parsed options object, connects to the database and returns a
    session.
    """

    engine_uri = args.engine_uri
    got_from = 'command line'

    if engine_uri is None:
        engine_uri, got_from = defaults.get_default_db_uri_with_origin()

    session = pokedb.db.connect(engine_uri)

    if args.verbose:
        print("Connected to database %(engine)s (from %(got_from)s)"
            % dict(engine=session.bind.url, got_from=got_from))

    return session


def get_fetcher(args):
    """Given a parsed options object, returns a Fetcher for the catalog."""

    api_url = args.api_url
    got_from = 'command line'

    if api_url is None:
        api_url, got_from = defaults.get_default_api_url_with_origin()

    if args.verbose:
        print("Using catalog %(api_url)s (from %(got_from)s)"
            % dict(api_url=api_url, got_from=got_from))

    return Fetcher(api_url)


### Plumbing commands

def command_seed(parser, args):
    session = get_session(args)
    fetcher = get_fetcher(args)

    printer = ProgressPrinter(args.verbose)
    if args.verbose:
        printer.banner(u'Starting FULL database seed...',
                       u'This will take 1-2 hours.')

    orchestrator = PipelineOrchestrator(session, fetcher, verbose=args.verbose)
    try:
        report = orchestrator.run()
    except FatalOrchestrationError as e:
        printer.banner(u'Seed FAILED while %s:' % e.state, u'%s' % e.cause)
        sys.exit(1)

    printer.report(u'Seed completed!', report)


def command_refresh_sprites(parser, args):
    session = get_session(args)
    fetcher = get_fetcher(args)

    report = SpriteRefresher(session, fetcher, verbose=args.verbose).run()

    ProgressPrinter(args.verbose).report(u'Sprite update completed!', report)


def command_status(parser, args):
    # Database, and a lame check for whether it's been seeded at least once
    session = get_session(args)
    print("  - OK!  Connected successfully.")

    inspector = inspect(session.bind)
    if not inspector.has_table(pokedb.db.tables.Pokemon.__tablename__):
        print("  - WARNING: Database has no tables; run `pokedb seed`.")
    else:
        for table in reversed(CLEAR_ORDER):
            print("  - %-20s %6d rows" % (
                table.__tablename__, session.query(table).count()))

    get_fetcher(args)


def command_help(parser, args):
    parser.print_help()


if __name__ == '__main__':
    main(*sys.argv)
