# -*- coding: utf-8 -*-
"""Artist duplicate detection.

Artists are compared on their stage name and legal name. Plain dicts with
``id``, ``name`` and ``legal_name`` keys are accepted so the helpers work on
``read()`` output as well as on hand-built data.
"""

import re

from rapidfuzz.distance import Levenshtein

NAME_MATCH = 'name_match'
LEGAL_NAME_MATCH = 'legal_name_match'
SIMILAR_NAME = 'similar_name'
SIMILAR_LEGAL_NAME = 'similar_legal_name'

_PUNCTUATION_RE = re.compile(r'[^\w\s]')
_WHITESPACE_RE = re.compile(r'\s+')


def normalize_name(value):
    """Lowercase, trim, drop punctuation and collapse whitespace."""
    value = (value or '').lower().strip()
    value = _PUNCTUATION_RE.sub('', value)
    return _WHITESPACE_RE.sub(' ', value)


def similarity_ratio(first, second):
    """Return 1 - levenshtein / longest length, 1.0 meaning identical."""
    max_len = max(len(first), len(second))
    if max_len == 0:
        return 1.0
    distance = Levenshtein.distance(first.lower(), second.lower())
    return 1 - distance / max_len


def compare_artists(first, second, threshold=0.85):
    """Return ``(similarity, reason)`` when both artists look alike, else None."""
    name1 = normalize_name(first['name'])
    name2 = normalize_name(second['name'])
    legal1 = normalize_name(first.get('legal_name')) if first.get('legal_name') else None
    legal2 = normalize_name(second.get('legal_name')) if second.get('legal_name') else None

    if name1 and name1 == name2:
        return 1.0, NAME_MATCH

    if legal1 and legal2 and legal1 == legal2:
        return 1.0, LEGAL_NAME_MATCH

    name_similarity = similarity_ratio(name1, name2)
    if name_similarity >= threshold and len(name1) > 2 and len(name2) > 2:
        return name_similarity, SIMILAR_NAME

    if legal1 and legal2:
        legal_similarity = similarity_ratio(legal1, legal2)
        if legal_similarity >= threshold and len(legal1) > 2 and len(legal2) > 2:
            return legal_similarity, SIMILAR_LEGAL_NAME

    # Stage name registered as the other artist's legal name
    if legal1 and name2 == legal1:
        return 1.0, NAME_MATCH
    if legal2 and name1 == legal2:
        return 1.0, NAME_MATCH

    return None


def _pair(first, second, similarity, reason):
    return {
        'artist1': {'id': first['id'], 'name': first['name'], 'legal_name': first.get('legal_name') or None},
        'artist2': {'id': second['id'], 'name': second['name'], 'legal_name': second.get('legal_name') or None},
        'similarity': similarity,
        'reason': reason,
    }


def find_duplicate_artists(artists, threshold=0.85):
    """Compare every pair of artists, best matches first."""
    duplicates = []
    for index, first in enumerate(artists):
        for second in artists[index + 1:]:
            match = compare_artists(first, second, threshold)
            if match:
                duplicates.append(_pair(first, second, *match))
    duplicates.sort(key=lambda dup: dup['similarity'], reverse=True)
    return duplicates


def find_duplicates_for_artist(artist, artists, threshold=0.85):
    """Compare one artist against all the others."""
    duplicates = []
    for other in artists:
        if other['id'] == artist['id']:
            continue
        match = compare_artists(artist, other, threshold)
        if match:
            duplicates.append(_pair(artist, other, *match))
    duplicates.sort(key=lambda dup: dup['similarity'], reverse=True)
    return duplicates
