from pokedb.search import search


def configure_parser(parser):
    parser.set_defaults(func=command_search)

    parser.add_argument('query', nargs='+',
        help="a Pokémon ID, or part of a name or type")
    parser.add_argument('--limit', type=int, default=10)


def command_search(parser, args):
    from pokedb.main import get_session
    session = get_session(args)
    results = search(session, u' '.join(args.query), limit=args.limit)
    if not results:
        print("No matches.")
    for pokemon in results:
        types = u'/'.join(pt.type.name for pt in pokemon.pokemon_types)
        print(u"#%d %s (%s)" % (pokemon.id, pokemon.name, types))
