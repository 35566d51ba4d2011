"""Query term highlighting for previews."""

import re

from pdfsearch.search.tokenizer import unique_tokens


def highlight(text: str, query: str) -> str:
    """Wrap whole-word, case-insensitive query token matches in brackets."""
    tokens = unique_tokens(query)
    if not tokens:
        return text
    # Longest first so a token never shadows a longer one sharing its prefix
    alternatives = "|".join(re.escape(t) for t in sorted(tokens, key=len, reverse=True))
    pattern = re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)
    return pattern.sub(lambda m: f"[{m.group(0)}]", text)
