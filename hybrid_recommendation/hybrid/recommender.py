import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..models.data_models import Product, RecommendationResult, ScoreBreakdown, UserBehavior
from .content_based import content_based_scores
from .context_aware import DEFAULT_TRENDING_JITTER, context_aware_scores
from .engagement import now_millis
from .interactions import build_interaction_map
from .item_based import collaborative_scores
from .user_based import DEFAULT_TOP_SIMILAR_USERS, category_popularity_scores, user_based_scores

logger = logging.getLogger(__name__)

# Weight Definitions
MULTI_USER_WEIGHTS = {
    "user_based": 0.25,
    "collaborative": 0.20,
    "content_based": 0.20,
    "context_aware": 0.20,
    "category_popularity": 0.15,
}

SINGLE_USER_WEIGHTS = {
    "collaborative": 0.4,
    "content_based": 0.3,
    "context_aware": 0.3,
}

DEFAULT_TOP_N = 10


def is_multi_user(all_user_behaviors: Optional[Sequence[UserBehavior]]) -> bool:
    return bool(all_user_behaviors) and len(all_user_behaviors) > 1


def combine_scores(components: Dict[str, float], multi_user: bool) -> float:
    weights = MULTI_USER_WEIGHTS if multi_user else SINGLE_USER_WEIGHTS
    return sum(components.get(name, 0.0) * w for name, w in weights.items())


class HybridRecommender:
    """
    Weighted blend of the item-based, content-based and context-aware
    strategies, plus user-based and category-popularity scoring when other
    users' behavior is supplied.

    The instance only carries the randomness source and tuning knobs; every
    call to ``recommend`` is independent.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        jitter: float = DEFAULT_TRENDING_JITTER,
        top_similar_users: int = DEFAULT_TOP_SIMILAR_USERS,
    ):
        self.rng = rng
        self.jitter = jitter
        self.top_similar_users = top_similar_users

    def component_scores(
        self,
        products: Sequence[Product],
        user_behavior: UserBehavior,
        all_user_behaviors: Optional[Sequence[UserBehavior]] = None,
        now_ms: Optional[float] = None,
    ) -> Dict[str, Dict[str, float]]:
        now_ms = now_ms if now_ms is not None else now_millis()

        components = {
            "collaborative": collaborative_scores(products, user_behavior, now_ms),
            "content_based": content_based_scores(products, user_behavior, now_ms),
            "context_aware": context_aware_scores(
                products, user_behavior, rng=self.rng, jitter=self.jitter, now_ms=now_ms
            ),
            "user_based": {},
            "category_popularity": {},
        }

        if is_multi_user(all_user_behaviors):
            components["user_based"] = user_based_scores(
                products, user_behavior, all_user_behaviors, now_ms, self.top_similar_users
            )
            components["category_popularity"] = category_popularity_scores(
                products, user_behavior, all_user_behaviors, now_ms
            )

        return components

    def recommend(
        self,
        products: Sequence[Product],
        user_behavior: UserBehavior,
        top_n: int = DEFAULT_TOP_N,
        all_user_behaviors: Optional[Sequence[UserBehavior]] = None,
        now_ms: Optional[float] = None,
    ) -> List[RecommendationResult]:
        now_ms = now_ms if now_ms is not None else now_millis()
        multi_user = is_multi_user(all_user_behaviors)
        components = self.component_scores(products, user_behavior, all_user_behaviors, now_ms)
        interacted = build_interaction_map(user_behavior, now_ms)

        results: List[RecommendationResult] = []
        for product in products:
            if product.id in interacted:
                continue

            values = {name: scores.get(product.id, 0.0) for name, scores in components.items()}
            final = combine_scores(values, multi_user)
            if final <= 0:
                continue

            breakdown = ScoreBreakdown(
                collaborative=values["collaborative"],
                content_based=values["content_based"],
                context_aware=values["context_aware"],
                user_based=values["user_based"],
                category_popularity=values["category_popularity"],
                final=final,
            )
            results.append(RecommendationResult(product.id, final, breakdown))

        # stable: ties keep catalog order
        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug(
            "user %s: %d scored, returning %d (multi_user=%s)",
            user_behavior.user_id, len(results), min(len(results), top_n), multi_user,
        )
        return results[:top_n]


def generate_recommendations(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    top_n: int = DEFAULT_TOP_N,
    all_user_behaviors: Optional[Sequence[UserBehavior]] = None,
    rng: Optional[np.random.Generator] = None,
    now_ms: Optional[float] = None,
) -> List[RecommendationResult]:
    return HybridRecommender(rng=rng).recommend(
        products, user_behavior, top_n=top_n, all_user_behaviors=all_user_behaviors, now_ms=now_ms
    )
