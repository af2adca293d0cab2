import logging
from math import log
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.data_models import Product, UserBehavior
from .engagement import engagement_score, now_millis
from .interactions import (
    InteractionMap,
    build_interaction_map,
    catalog_index,
    category_interests,
    engaged_products,
)

logger = logging.getLogger(__name__)

# Weight Definitions
W_CATEGORY_SIMILARITY = 2.0
W_HIT_COUNT = 0.2
DEFAULT_TOP_SIMILAR_USERS = 10


def _category_similarity(target: Dict[str, float], other: Dict[str, float]) -> float:
    ratios: List[float] = []
    for category, interest in target.items():
        other_interest = other.get(category, 0.0)
        if other_interest > 0:
            ratios.append(min(interest, other_interest) / max(interest, other_interest))
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def user_similarity(
    target_interactions: InteractionMap,
    target_interests: Dict[str, float],
    other_interactions: InteractionMap,
    other_interests: Dict[str, float],
    now_ms: float,
) -> float:
    """
    Shared engagement on common products, plus category-interest agreement,
    boosted logarithmically by the number of common products.
    """
    similarity = 0.0
    common_products = 0
    for product_id, interaction in target_interactions.items():
        other = other_interactions.get(product_id)
        if other is None:
            continue
        common_products += 1
        similarity += min(engagement_score(interaction, now_ms), engagement_score(other, now_ms))

    similarity += _category_similarity(target_interests, other_interests) * W_CATEGORY_SIMILARITY

    if common_products > 0:
        similarity *= 1 + log(common_products + 1)

    return similarity


def find_similar_users(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    all_user_behaviors: Sequence[UserBehavior],
    now_ms: Optional[float] = None,
    top_k: int = DEFAULT_TOP_SIMILAR_USERS,
) -> List[Tuple[UserBehavior, float]]:
    now_ms = now_ms if now_ms is not None else now_millis()
    index = catalog_index(products)

    target_interactions = build_interaction_map(user_behavior, now_ms)
    target_interests = category_interests(target_interactions, index, now_ms)

    similar: List[Tuple[UserBehavior, float]] = []
    for other in all_user_behaviors:
        if other.user_id == user_behavior.user_id:
            continue
        other_interactions = build_interaction_map(other, now_ms)
        other_interests = category_interests(other_interactions, index, now_ms)
        similarity = user_similarity(
            target_interactions, target_interests, other_interactions, other_interests, now_ms
        )
        if similarity > 0:
            similar.append((other, similarity))

    similar.sort(key=lambda pair: pair[1], reverse=True)
    return similar[:top_k]


def user_based_scores(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    all_user_behaviors: Optional[Sequence[UserBehavior]],
    now_ms: Optional[float] = None,
    top_k_users: int = DEFAULT_TOP_SIMILAR_USERS,
) -> Dict[str, float]:
    """
    Propagate what the most similar users engaged with to the target user.

    score = sum(engagement * similarity) / len(top users) + ln(hits + 1) * 0.2
    """
    if not all_user_behaviors:
        return {}

    now_ms = now_ms if now_ms is not None else now_millis()
    index = catalog_index(products)
    target_interactions = build_interaction_map(user_behavior, now_ms)

    top_users = find_similar_users(products, user_behavior, all_user_behaviors, now_ms, top_k_users)
    if not top_users:
        return {}
    logger.debug("user %s: %d similar users", user_behavior.user_id, len(top_users))

    accumulated: Dict[str, float] = {}
    hits: Dict[str, int] = {}
    for behavior, similarity in top_users:
        for product_id, interaction in build_interaction_map(behavior, now_ms).items():
            if product_id in target_interactions:
                continue
            accumulated[product_id] = accumulated.get(product_id, 0.0) + engagement_score(interaction, now_ms) * similarity
            hits[product_id] = hits.get(product_id, 0) + 1

    scores: Dict[str, float] = {}
    for product_id, total in accumulated.items():
        if product_id not in index:
            continue
        scores[product_id] = total / len(top_users) + log(hits[product_id] + 1) * W_HIT_COUNT

    return scores


def category_popularity_scores(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    all_user_behaviors: Optional[Sequence[UserBehavior]],
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    """
    Boost products that are popular, across every supplied user, inside the
    categories the target user is interested in. Products nobody touched get
    no entry.
    """
    if not all_user_behaviors:
        return {}

    now_ms = now_ms if now_ms is not None else now_millis()
    index = catalog_index(products)
    target_interactions = build_interaction_map(user_behavior, now_ms)
    interests = category_interests(target_interactions, index, now_ms)

    # category -> product id -> summed engagement
    popularity: Dict[str, Dict[str, float]] = {}
    for behavior in all_user_behaviors:
        for product, engagement in engaged_products(build_interaction_map(behavior, now_ms), index, now_ms):
            by_product = popularity.setdefault(product.category, {})
            by_product[product.id] = by_product.get(product.id, 0.0) + engagement

    user_count = len(all_user_behaviors)
    scores: Dict[str, float] = {}
    for product in products:
        if product.id in target_interactions:
            continue
        interest = interests.get(product.category, 0.0)
        if interest <= 0:
            continue
        by_product = popularity.get(product.category)
        if by_product is None or product.id not in by_product:
            continue
        scores[product.id] = (by_product[product.id] / user_count) * min(interest, 1.0)

    return scores
