from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.data_models import (
    CartActions,
    CheckoutActions,
    Product,
    ProductInteraction,
    UserBehavior,
)
from .engagement import engagement_score, now_millis

InteractionMap = Dict[str, ProductInteraction]


def catalog_index(products: Iterable[Product]) -> Dict[str, Product]:
    return {p.id: p for p in products}


def build_interaction_map(behavior: UserBehavior, now_ms: Optional[float] = None) -> InteractionMap:
    """
    Merge detailed interaction records with the legacy behavior lists.

    Precedence:
    1. product_interactions are copied as-is.
    2. viewed_products only fill gaps (view_count=1), never overwrite.
    3. purchased_products always merge: completed_purchase, purchase_count += 1.
    4. cart_items always merge: added_to_cart=now, times_added_to_cart += 1.
    5. ratings always merge the rating.

    Records are replaced, never mutated, so the caller's behavior is untouched.
    """
    if now_ms is None:
        now_ms = now_millis()

    interaction_map: InteractionMap = dict(behavior.product_interactions or {})

    for product_id in behavior.viewed_products or []:
        if product_id not in interaction_map:
            interaction_map[product_id] = ProductInteraction(product_id=product_id, view_count=1)

    for product_id in behavior.purchased_products or []:
        existing = interaction_map.get(product_id) or ProductInteraction(product_id=product_id)
        checkout = existing.checkout_actions or CheckoutActions()
        interaction_map[product_id] = replace(
            existing,
            checkout_actions=replace(
                checkout,
                completed_purchase=True,
                purchase_count=(checkout.purchase_count or 0) + 1,
            ),
        )

    for product_id in behavior.cart_items or []:
        existing = interaction_map.get(product_id) or ProductInteraction(product_id=product_id)
        cart = existing.cart_actions or CartActions()
        interaction_map[product_id] = replace(
            existing,
            cart_actions=replace(
                cart,
                added_to_cart=now_ms,
                times_added_to_cart=(cart.times_added_to_cart or 0) + 1,
            ),
        )

    for product_id, rating in (behavior.ratings or {}).items():
        existing = interaction_map.get(product_id) or ProductInteraction(product_id=product_id)
        interaction_map[product_id] = replace(existing, rating=rating)

    return interaction_map


def engaged_products(
    interaction_map: InteractionMap,
    index: Dict[str, Product],
    now_ms: Optional[float] = None,
) -> List[Tuple[Product, float]]:
    """(product, engagement) for every interacted id that resolves in the catalog."""
    pairs: List[Tuple[Product, float]] = []
    for product_id, interaction in interaction_map.items():
        product = index.get(product_id)
        if product is None:
            continue
        pairs.append((product, engagement_score(interaction, now_ms)))
    return pairs


def category_interests(
    interaction_map: InteractionMap,
    index: Dict[str, Product],
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    interests: Dict[str, float] = {}
    for product, engagement in engaged_products(interaction_map, index, now_ms):
        interests[product.category] = interests.get(product.category, 0.0) + engagement
    return interests


def weighted_average_price(engaged: List[Tuple[Product, float]]) -> Tuple[float, float]:
    """Engagement-weighted mean price and the total weight behind it."""
    total_weight = sum(engagement for _, engagement in engaged)
    if total_weight <= 0:
        return 0.0, total_weight
    return sum(p.price * engagement for p, engagement in engaged) / total_weight, total_weight


def price_similarity(price: float, avg_price: float) -> float:
    if avg_price <= 0:
        return 1.0 if price == avg_price else 0.0
    return 1.0 / (1.0 + abs(price - avg_price) / avg_price)


def tag_overlap(a: Product, b: Product) -> int:
    return len((a.tags or frozenset()) & (b.tags or frozenset()))
