u"""Helpers for picking values out of catalog payloads."""

import re

_FLAVOR_BREAKS = re.compile(u'[\f\n\r]')
_WHITESPACE = re.compile(u'\\s+')


def id_from_url(url):
    u"""Return the trailing numeric ID of a catalog URL.

    >>> id_from_url('https://pokeapi.co/api/v2/evolution-chain/67/')
    67
    """
    return int(url.rstrip('/').rsplit('/', 1)[-1])

def name_from_url(url):
    return url.rstrip('/').rsplit('/', 1)[-1]

def clean_text(text):
    u"""Normalize whitespace in game text: page breaks and line breaks become
    spaces, runs of whitespace collapse into one, ends are trimmed.
    """
    if not text:
        return None
    text = _FLAVOR_BREAKS.sub(u' ', text)
    return _WHITESPACE.sub(u' ', text).strip()

def english_text(entries, key='flavor_text'):
    u"""Return the cleaned `key` of the first English entry, or None."""
    for entry in entries or ():
        if (entry.get('language') or {}).get('name') == 'en':
            return clean_text(entry.get(key))
    return None

def english_flavor_texts(entries, limit=10):
    u"""Return up to `limit` (version, text) pairs of English flavor text.

    Only the first text for each version is kept.
    """
    texts = []
    seen_versions = set()
    for entry in entries or ():
        if entry['language']['name'] != 'en':
            continue
        version = entry['version']['name']
        text = clean_text(entry.get('flavor_text'))
        if version in seen_versions or not text:
            continue
        seen_versions.add(version)
        texts.append((version, text))
        if len(texts) >= limit:
            break
    return texts

def pick_sprites(sprites):
    u"""Map a catalog `sprites` object onto the Pokemon sprite columns."""
    usum = ((sprites.get('versions') or {})
        .get('generation-vii', {})
        .get('ultra-sun-ultra-moon', {}))
    other = sprites.get('other') or {}
    artwork = other.get('official-artwork') or {}
    home = other.get('home') or {}
    return dict(
        sprite=usum.get('front_default') or sprites.get('front_default') or u'',
        sprite_shiny=usum.get('front_shiny') or sprites.get('front_shiny'),
        sprite_back=sprites.get('back_default'),
        sprite_back_shiny=sprites.get('back_shiny'),
        sprite_artwork=artwork.get('front_default'),
        sprite_artwork_shiny=artwork.get('front_shiny'),
        sprite_home=home.get('front_default'),
        sprite_home_shiny=home.get('front_shiny'),
    )
