import logging
import re
from typing import List, Optional

from app.domain.models.product import QueryFilter
from app.domain.services.constants import STOPWORDS, MINOR_UNITS_PER_MAJOR
from app.domain.services.term_vector import clean_token

logger = logging.getLogger(__name__)

# "under 100", "below 200", "less than 50"
_MAX_PRICE = re.compile(r"\b(?:under|below|less than)\s+(\d+)\b", re.ASCII)
# "between 50 and 150"
_PRICE_RANGE = re.compile(r"\bbetween\s+(\d+)\s+and\s+(\d+)\b", re.ASCII)


def _keywords(text: str) -> List[str]:
    out = []
    for word in text.split():
        w = clean_token(word)
        if not w or w.isdigit() or w in STOPWORDS:
            continue
        out.append(w)
    return out


def parse_query(query: str) -> QueryFilter:
    """
    Turn a free-text query into a QueryFilter.

    - Both price checks always run, "under" first then "between": a query
      matching both keeps the "between" upper bound.
    - Keywords keep query order and duplicates.
    - Never raises; a query with nothing usable gives an empty filter.
    """
    text = (query or "").lower()
    min_price: Optional[int] = None
    max_price: Optional[int] = None

    # last occurrence wins when a phrase repeats
    if found := _MAX_PRICE.findall(text):
        max_price = int(found[-1]) * MINOR_UNITS_PER_MAJOR

    if found := _PRICE_RANGE.findall(text):
        low, high = found[-1]
        min_price = int(low) * MINOR_UNITS_PER_MAJOR
        max_price = int(high) * MINOR_UNITS_PER_MAJOR

    filt = QueryFilter(min_price=min_price, max_price=max_price, keywords=tuple(_keywords(text)))
    logger.debug("parse_query query=%r -> min=%s max=%s keywords=%s", query, filt.min_price, filt.max_price, filt.keywords)
    return filt
