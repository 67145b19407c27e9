from __future__ import annotations

import re

PUNCTUATION_PATTERN = re.compile(r'[^\w\s]')
WHITESPACE_PATTERN = re.compile(r'\s+')
SEPARATOR_PATTERN = re.compile(r'[\W_]+')


def normalize_name(value: str) -> str:
    cleaned = PUNCTUATION_PATTERN.sub('', (value or '').lower())
    return WHITESPACE_PATTERN.sub(' ', cleaned).strip()


def normalize_term(value: str) -> str:
    # Punctuation and underscores separate words: "North-Korea" -> "north korea".
    return SEPARATOR_PATTERN.sub(' ', (value or '').lower()).strip()


def contains_phrase(text: str, phrase: str) -> bool:
    text = normalize_term(text)
    phrase = normalize_term(phrase)
    if not text or not phrase:
        return False
    return phrase in text


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr.append(min(
                prev[j] + 1,
                curr[j - 1] + 1,
                prev[j - 1] + cost,
            ))
        prev = curr
    return prev[-1]


def similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein(a, b) / longest


def contains_term(text: str, term: str) -> bool:
    if not text or not term:
        return False
    return re.search(rf'\b{re.escape(term)}\b', text) is not None
