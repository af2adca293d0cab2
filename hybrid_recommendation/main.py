import logging

from . import config
from .data.mock_data import get_mock_products, get_mock_user_behavior, get_mock_user_behaviors
from .service.pipeline import recommend_for_user_hybrid


def demo_single_user_recommendation():
    print("=== user1 Recommendations (single user) ===")
    products = get_mock_products()
    recs = recommend_for_user_hybrid(products, get_mock_user_behavior(), top_n=5)
    for r in recs:
        print(f"{r.product_id} (score={r.score:.4f})")


def demo_multi_user_recommendation():
    print("=== user1 Recommendations (multi user) ===")
    products = get_mock_products()
    recs = recommend_for_user_hybrid(
        products,
        get_mock_user_behavior(),
        top_n=5,
        all_user_behaviors=get_mock_user_behaviors(),
    )
    for r in recs:
        print(f"{r.product_id} (score={r.score:.4f}, user_based={r.breakdown.user_based:.4f})")


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    demo_single_user_recommendation()
    demo_multi_user_recommendation()
