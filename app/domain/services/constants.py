
# Constants for the search & recommendation engine.
SEARCH_LIMIT = 20  # Max results returned by search
SIMILAR_LIMIT = 10  # Max results returned by similar products
RECOMMENDATION_LIMIT = 10  # Max results for user recommendations
POPULAR_LIMIT = 20  # Default for the popular-products listing

# Minimal cosine similarity for a product to count as "similar" (strictly greater)
MIN_SIMILARITY = 0.1

# Price phrases are given in major units, catalog prices are in cents
MINOR_UNITS_PER_MAJOR = 100

# Words never used as search keywords (articles, conjunctions, prepositions, price phrases)
STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "under", "below", "above", "between", "less", "more", "than",
    "dollars", "dollar", "$",
})

# Recommendation strategies
STRATEGY_POPULAR = "popular"  # Rating-based, same for everyone
STRATEGY_TAG_AFFINITY = "tag_affinity"  # Tags of the user's recent events

# Tag affinity
BEHAVIOR_HISTORY = 20  # Recent events read per user
BEHAVIOR_WEIGHTS = {"purchase": 3, "add_to_cart": 2, "view": 1}
TOP_AFFINITY_TAGS = 5
