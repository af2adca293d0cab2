from .api_interface import (
    build_cart_summary,
    classify_recommendation_type,
    get_user_recommendations,
)

__all__ = [
    "get_user_recommendations",
    "classify_recommendation_type",
    "build_cart_summary",
]
