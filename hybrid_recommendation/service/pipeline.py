from __future__ import annotations
import logging
from typing import List, Optional, Sequence

import numpy as np

from .. import config
from ..hybrid.engagement import now_millis
from ..hybrid.recommender import HybridRecommender, is_multi_user
from ..models.data_models import Product, RecommendationResult, UserBehavior

logger = logging.getLogger(__name__)


def build_recommender(rng: Optional[np.random.Generator] = None) -> HybridRecommender:
    if rng is None:
        rng = np.random.default_rng(config.RANDOM_SEED)
    return HybridRecommender(
        rng=rng,
        jitter=config.TRENDING_JITTER,
        top_similar_users=config.TOP_SIMILAR_USERS,
    )


def recommend_for_user_hybrid(
    products: Sequence[Product],
    user_behavior: UserBehavior,
    top_n: Optional[int] = None,
    all_user_behaviors: Optional[Sequence[UserBehavior]] = None,
    recommender: Optional[HybridRecommender] = None,
    now_ms: Optional[float] = None,
) -> List[RecommendationResult]:
    """
    1) pick the mode (single / multi user)
    2) score the catalog with HybridRecommender
    3) log the top_n results with their breakdown
    """
    top_n = top_n or config.DEFAULT_TOP_N
    recommender = recommender or build_recommender()
    now_ms = now_ms if now_ms is not None else now_millis()

    logger.info("=" * 60)
    logger.info("[Hybrid Pipeline] 🚀 Hybrid recommendation started")
    logger.info(
        f"[Hybrid Pipeline] 📋 user_id={user_behavior.user_id}, products={len(products)}, "
        f"top_n={top_n}, roster={len(all_user_behaviors or [])}"
    )

    if is_multi_user(all_user_behaviors):
        logger.info(f"[Hybrid Pipeline] 🤝 Multi-user mode with {len(all_user_behaviors)} users")
    else:
        logger.info("[Hybrid Pipeline] 👤 Single-user mode (no collaborative data)")

    results = recommender.recommend(
        products,
        user_behavior,
        top_n=top_n,
        all_user_behaviors=all_user_behaviors,
        now_ms=now_ms,
    )

    if not results:
        logger.warning("[Hybrid Pipeline] ⚠️ No product scored above zero, returning empty result")

    for i, r in enumerate(results):
        b = r.breakdown
        logger.info(
            f"[Hybrid Pipeline]   {i+1}. {r.product_id} | final={b.final:.4f} | "
            f"collab={b.collaborative:.4f} | content={b.content_based:.4f} | "
            f"context={b.context_aware:.4f} | user={b.user_based:.4f} | "
            f"popularity={b.category_popularity:.4f}"
        )

    logger.info(f"[Hybrid Pipeline] ✅ Returned {len(results)} recommendations")
    logger.info("=" * 60)
    return results
