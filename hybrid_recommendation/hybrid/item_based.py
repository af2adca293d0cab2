from typing import Dict, Optional, Sequence

from ..models.data_models import Product, UserBehavior
from .engagement import now_millis
from .interactions import (
    build_interaction_map,
    catalog_index,
    engaged_products,
    price_similarity,
    tag_overlap,
    weighted_average_price,
)

# Weight Definitions
W_CATEGORY_PREFERENCE = 0.4
W_PRICE = 0.3
W_NEAREST_ITEM = 0.3

PAIR_SAME_CATEGORY = 0.5
PAIR_SHARED_TAG = 0.1


def _pair_similarity(product: Product, other: Product) -> float:
    similarity = PAIR_SAME_CATEGORY if product.category == other.category else 0.0
    return similarity + tag_overlap(product, other) * PAIR_SHARED_TAG


def collaborative_scores(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    """
    Item-based scoring from the user's own history: category preference,
    closeness to the engagement-weighted average price, and the strongest
    engagement-weighted similarity to any single interacted product.

    Every untouched catalog product gets an entry, possibly 0.0.
    """
    now_ms = now_ms if now_ms is not None else now_millis()
    interactions = build_interaction_map(user_behavior, now_ms)
    engaged = engaged_products(interactions, catalog_index(products), now_ms)

    category_preferences: Dict[str, float] = {}
    for product, engagement in engaged:
        category_preferences[product.category] = category_preferences.get(product.category, 0.0) + engagement

    avg_price, price_weight = weighted_average_price(engaged)

    scores: Dict[str, float] = {}
    for product in products:
        if product.id in interactions:
            continue

        score = category_preferences.get(product.category, 0.0) * W_CATEGORY_PREFERENCE

        if price_weight > 0:
            score += price_similarity(product.price, avg_price) * W_PRICE

        nearest = 0.0
        for interacted, engagement in engaged:
            nearest = max(nearest, _pair_similarity(product, interacted) * engagement)
        score += nearest * W_NEAREST_ITEM

        scores[product.id] = score

    return scores
