from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np

from ..models.data_models import Product, UserBehavior
from .engagement import engagement_score, now_millis
from .interactions import (
    InteractionMap,
    build_interaction_map,
    catalog_index,
    engaged_products,
    price_similarity,
    weighted_average_price,
)

# Weight Definitions
W_PRICE_BAND = 0.3
W_PREMIUM_FOR_ENGAGED = 0.25
W_CHECKOUT_BAND = 0.3
W_EVENING_PREMIUM = 0.15
W_MOBILE_MID_RANGE = 0.1
W_EXPLICIT_RATING = 0.15
DEFAULT_TRENDING_JITTER = 0.2

HIGH_ENGAGEMENT_THRESHOLD = 1.0
PREMIUM_PRICE = 100.0
MOBILE_PRICE_RANGE = (20.0, 100.0)
CHECKOUT_BAND = (0.8, 1.2)


@dataclass(frozen=True)
class ContextFactors:
    has_checkout_behavior: bool = False
    has_high_engagement: bool = False
    avg_price: float = 0.0
    price_weight: float = 0.0


def derive_context(interactions: InteractionMap, index: Dict[str, Product], now_ms: float) -> ContextFactors:
    has_checkout = False
    has_high_engagement = False
    for interaction in interactions.values():
        checkout = interaction.checkout_actions
        if checkout is not None and checkout.proceeded_to_checkout:
            has_checkout = True
        if engagement_score(interaction, now_ms) > HIGH_ENGAGEMENT_THRESHOLD:
            has_high_engagement = True

    avg_price, price_weight = weighted_average_price(engaged_products(interactions, index, now_ms))
    return ContextFactors(has_checkout, has_high_engagement, avg_price, price_weight)


def context_aware_scores(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    rng: Optional[np.random.Generator] = None,
    jitter: float = DEFAULT_TRENDING_JITTER,
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    """
    Heuristic scores from price band, device, time of day and behavioral flags.

    Each score also carries a uniform "trending" term in [0, jitter). Pass a
    seeded ``rng`` for reproducible output, or ``jitter=0.0`` to drop the term.
    """
    now_ms = now_ms if now_ms is not None else now_millis()
    if rng is None:
        rng = np.random.default_rng()

    interactions = build_interaction_map(user_behavior, now_ms)
    context = derive_context(interactions, catalog_index(products), now_ms)
    ratings = user_behavior.ratings or {}

    scores: Dict[str, float] = {}
    for product in products:
        if product.id in interactions:
            continue

        score = 0.0
        price = product.price

        if context.price_weight > 0:
            score += price_similarity(price, context.avg_price) * W_PRICE_BAND

        if context.has_high_engagement and price > PREMIUM_PRICE:
            score += W_PREMIUM_FOR_ENGAGED

        if context.has_checkout_behavior:
            low, high = CHECKOUT_BAND
            if context.avg_price * low <= price <= context.avg_price * high:
                score += W_CHECKOUT_BAND

        if user_behavior.time_of_day == "evening" and price > PREMIUM_PRICE:
            score += W_EVENING_PREMIUM

        if user_behavior.device_type == "mobile":
            low, high = MOBILE_PRICE_RANGE
            if low <= price <= high:
                score += W_MOBILE_MID_RANGE

        if ratings.get(product.id):
            score += ratings[product.id] * W_EXPLICIT_RATING

        score += float(rng.uniform(0.0, jitter))

        scores[product.id] = score

    return scores
