import re
from collections import Counter
from typing import Iterable, List, Optional

from app.domain.models.product import ProductRecord

_NON_ALNUM = re.compile(r"[^a-z0-9]")

TermVector = Counter  # term -> occurrence count


def clean_token(token: str) -> str:
    """Drop every character outside [a-z0-9] (token must already be lowercase)."""
    return _NON_ALNUM.sub("", token)


def tokenize(text: str) -> List[str]:
    tokens = []
    for raw in text.lower().split():
        tok = clean_token(raw)
        if tok:
            tokens.append(tok)
    return tokens


def build_vector(text_fields: Iterable[Optional[str]]) -> TermVector:
    """
    Build a term-frequency vector from a product's text fields.
    Fields are joined with single spaces; None fields count as empty.
    """
    text = " ".join(f or "" for f in text_fields)
    return Counter(tokenize(text))


def similarity_fields(product: ProductRecord) -> List[str]:
    """Fields used for product-to-product similarity: title + tags."""
    return [product.title, *product.tags]


def relevance_fields(product: ProductRecord) -> List[str]:
    """Fields used for query relevance: title + description + tags."""
    return [product.title, product.description or "", *product.tags]
