from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..data.loader import InvalidPayloadError, PayloadLoader, load_payload
from ..hybrid.recommender import HybridRecommender, is_multi_user
from ..models.data_models import Product, ScoreBreakdown, UserBehavior
from ..service.pipeline import recommend_for_user_hybrid

logger = logging.getLogger(__name__)


# ------------------------------------------------------
# Dominant signal, picked by the caller for the explanation generator
# ------------------------------------------------------
def classify_recommendation_type(breakdown: ScoreBreakdown) -> str:
    collab = breakdown.collaborative
    content = breakdown.content_based
    context = breakdown.context_aware

    if collab > content and collab > context:
        return "collaborative"
    if content > collab and content > context:
        return "content-based"
    if context > collab and context > content:
        return "trending"
    return "hybrid"


def build_cart_summary(products: Sequence[Product], behavior: UserBehavior) -> Dict[str, Any]:
    cart_ids = set(behavior.cart_items or [])
    items = [p for p in products if p.id in cart_ids]
    return {
        "items": [{"id": p.id, "name": p.name, "price": p.price} for p in items],
        "count": len(items),
        "total_value": round(sum(p.price for p in items), 2),
    }


def _product_dict(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "price": product.price,
        "description": product.description,
        "tags": sorted(product.tags or []),
        "image": product.image,
    }


# ------------------------------------------------------
# Hybrid recommendation API
# ------------------------------------------------------
def get_user_recommendations(
    products_doc: Any,
    user_behavior_doc: Any,
    all_user_behaviors_doc: Optional[Any] = None,
    limit: Optional[int] = None,
    recommender: Optional[HybridRecommender] = None,
    now_ms: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Parse the upstream payload, run the hybrid engine and shape the response
    consumed by the storefront and the explanation generator.

    Raises InvalidPayloadError when the payload does not validate.
    """
    loader = PayloadLoader()
    try:
        products, behavior, roster = load_payload(
            products_doc, user_behavior_doc, all_user_behaviors_doc, loader=loader
        )
    except InvalidPayloadError as e:
        logger.error(f"[API] ❌ Rejected recommendation payload: {e}")
        raise

    ignored = loader.find_unknown_product_ids(products, behavior)

    recs = recommend_for_user_hybrid(
        products,
        behavior,
        top_n=limit,
        all_user_behaviors=roster,
        recommender=recommender,
        now_ms=now_ms,
    )

    by_id = {p.id: p for p in products}
    results: List[Dict[str, Any]] = []
    for r in recs:
        entry = r.to_frontend_dict()
        entry["product"] = _product_dict(by_id[r.product_id])
        entry["recommendationType"] = classify_recommendation_type(r.breakdown)
        results.append(entry)

    return {
        "user_id": behavior.user_id,
        "mode": "multi_user" if is_multi_user(roster) else "single_user",
        "count": len(results),
        "results": results,
        "ignored_product_ids": ignored,
        "cart_summary": build_cart_summary(products, behavior),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
