from typing import Dict, Optional, Sequence

from ..data.preprocess import description_words
from ..models.data_models import Product, UserBehavior
from .engagement import now_millis
from .interactions import build_interaction_map, catalog_index, engaged_products, tag_overlap

# Weight Definitions
W_SAME_CATEGORY = 0.50
W_SHARED_TAG = 0.15
W_PRICE_RATIO = 0.25
W_SHARED_WORD = 0.05


def _price_ratio(a: Product, b: Product) -> float:
    high = max(a.price, b.price)
    if high <= 0:
        return 1.0
    return min(a.price, b.price) / high


def product_similarity(product: Product, other: Product) -> float:
    similarity = 0.0

    if product.category == other.category:
        similarity += W_SAME_CATEGORY

    similarity += tag_overlap(product, other) * W_SHARED_TAG
    similarity += _price_ratio(product, other) * W_PRICE_RATIO

    if product.description and other.description:
        shared = description_words(product.description) & description_words(other.description)
        similarity += len(shared) * W_SHARED_WORD

    return similarity


def content_based_scores(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    """
    Engagement-weighted mean similarity of each untouched product to the
    products the user engaged with. Products with no engagement weight behind
    them get no entry at all.
    """
    now_ms = now_ms if now_ms is not None else now_millis()
    interactions = build_interaction_map(user_behavior, now_ms)
    if not interactions:
        return {}

    engaged = engaged_products(interactions, catalog_index(products), now_ms)

    scores: Dict[str, float] = {}
    for product in products:
        if product.id in interactions:
            continue

        total_similarity = 0.0
        total_weight = 0.0
        for interacted, engagement in engaged:
            total_similarity += product_similarity(product, interacted) * engagement
            total_weight += engagement

        if total_weight > 0:
            scores[product.id] = total_similarity / total_weight

    return scores
