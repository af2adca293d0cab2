from .engagement import engagement_score
from .interactions import build_interaction_map
from .content_based import content_based_scores
from .item_based import collaborative_scores
from .context_aware import context_aware_scores
from .user_based import user_based_scores, category_popularity_scores
from .recommender import HybridRecommender, generate_recommendations

__all__ = [
    "engagement_score",
    "build_interaction_map",
    "content_based_scores",
    "collaborative_scores",
    "context_aware_scores",
    "user_based_scores",
    "category_popularity_scores",
    "HybridRecommender",
    "generate_recommendations",
]
