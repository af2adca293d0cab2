import time
from typing import Optional

from ..models.data_models import ProductInteraction

# Engagement Weights
W_VIEW_DURATION = 0.3
W_VIEW_COUNT = 0.2
W_INTERACTION_FLAGS = 0.3
W_RATING = 0.4
W_RECENCY = 0.3

FULL_VIEW_SECONDS = 60.0
FULL_VIEW_COUNT = 5.0
INTERACTION_FLAG_TYPES = 5
RECENCY_WINDOW_DAYS = 30.0

CART_ADDED_BONUS = 0.5
CART_ADD_STEP, CART_ADD_CAP = 0.2, 0.6
CART_REMOVED_PENALTY = 0.3
CART_REMOVE_STEP, CART_REMOVE_CAP = 0.15, 0.4

CHECKOUT_PROCEEDED_BONUS = 0.7
PURCHASE_COMPLETED_BONUS = 1.5
PURCHASE_STEP, PURCHASE_CAP = 0.5, 2.0

MS_PER_DAY = 1000.0 * 60 * 60 * 24


def now_millis() -> float:
    return time.time() * 1000.0


def _cart_score(interaction: ProductInteraction) -> float:
    cart = interaction.cart_actions
    if cart is None:
        return 0.0

    score = 0.0
    if cart.added_to_cart:
        score += CART_ADDED_BONUS
    score += min((cart.times_added_to_cart or 0) * CART_ADD_STEP, CART_ADD_CAP)

    # removals are a disinterest signal
    if cart.removed_from_cart:
        score -= CART_REMOVED_PENALTY
    score -= min((cart.times_removed_from_cart or 0) * CART_REMOVE_STEP, CART_REMOVE_CAP)
    return score


def _checkout_score(interaction: ProductInteraction) -> float:
    checkout = interaction.checkout_actions
    if checkout is None:
        return 0.0

    score = 0.0
    if checkout.proceeded_to_checkout:
        score += CHECKOUT_PROCEEDED_BONUS
    if checkout.completed_purchase:
        score += PURCHASE_COMPLETED_BONUS
    score += min((checkout.purchase_count or 0) * PURCHASE_STEP, PURCHASE_CAP)
    return score


def _recency_score(interaction: ProductInteraction, now_ms: float) -> float:
    if not interaction.timestamp:
        return 0.0
    days = (now_ms - interaction.timestamp) / MS_PER_DAY
    return max(0.0, 1.0 - days / RECENCY_WINDOW_DAYS) * W_RECENCY


def engagement_score(interaction: ProductInteraction, now_ms: Optional[float] = None) -> float:
    """
    Collapse one interaction record into a single non-negative signal.

    Every field is optional and a missing (or zero) field contributes nothing.
    The result has no upper bound: repeat purchasers easily exceed 1.0, which
    the context rules use as their "high engagement" threshold.
    """
    if now_ms is None:
        now_ms = now_millis()

    score = 0.0

    if interaction.view_duration:
        score += min(interaction.view_duration / FULL_VIEW_SECONDS, 1.0) * W_VIEW_DURATION

    if interaction.view_count:
        score += min(interaction.view_count / FULL_VIEW_COUNT, 1.0) * W_VIEW_COUNT

    if interaction.interactions is not None:
        flags = interaction.interactions.true_count()
        score += (flags / INTERACTION_FLAG_TYPES) * W_INTERACTION_FLAGS

    score += _cart_score(interaction)
    score += _checkout_score(interaction)

    if interaction.rating:
        score += (interaction.rating / 5.0) * W_RATING

    score += _recency_score(interaction, now_ms)

    return max(0.0, score)
