"""Unicode-aware tokenizer shared by indexing and querying."""

import re

# \w minus underscore: anything that is not a letter, digit, whitespace or hyphen
_SEPARATORS = re.compile(r"[^\w\s-]|_")


def tokenize(text: str) -> list[str]:
    """Lowercase ``text`` and split it into search tokens.

    Letters and digits of any script are kept, as are hyphens, so compound
    terms like ``pre-trial`` stay a single token. Every other character acts
    as a separator.
    """
    return _SEPARATORS.sub(" ", text.lower()).split()


def unique_tokens(text: str) -> list[str]:
    """Tokens of ``text`` in first-seen order, without repeats."""
    return list(dict.fromkeys(tokenize(text)))
