"""Measure the token cost of rendered skill context.

Tier 1 is budgeted with a flat per-skill estimate. The CLI additionally
reports what the rendered digest and each skill body actually cost, measured
with tiktoken. When no encoding can be loaded (its BPE file is fetched on
first use) the count degrades to a word-based estimate.
"""

import logging

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cl100k_base"

# Rough ratio for English prose
TOKENS_PER_WORD = 1.3

_encodings: dict[str, tiktoken.Encoding] = {}


def _get_encoding(name: str) -> tiktoken.Encoding:
    if name not in _encodings:
        _encodings[name] = tiktoken.get_encoding(name)
    return _encodings[name]


def count_tokens(text: str, encoding: str = DEFAULT_ENCODING) -> int:
    """Count the tokens in a piece of rendered context.

    Args:
        text: SKILL.md body, tier 1 XML or any other prompt fragment
        encoding: tiktoken encoding name

    Returns:
        Token count, or a word-based estimate if the encoding is unavailable

    Example:
        >>> count_tokens("Hello world!")
        3
    """
    if not text:
        return 0

    try:
        return len(_get_encoding(encoding).encode(text))
    except Exception as e:
        logger.warning(f"tiktoken encoding '{encoding}' unavailable ({e}), estimating from words")
        return estimate_tokens_from_words(text)


def estimate_tokens_from_words(text: str) -> int:
    return int(len(text.split()) * TOKENS_PER_WORD)


def format_token_count(count: int) -> str:
    """Abbreviate a token count for display: 950, 1.5k, 2.0M."""
    for threshold, suffix in ((1_000_000, "M"), (1_000, "k")):
        if count >= threshold:
            return f"{count / threshold:.1f}{suffix}"
    return str(count)
