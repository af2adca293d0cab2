from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    price: float
    description: Optional[str] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)
    attributes: Optional[Dict[str, Any]] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class InteractionFlags:
    size_selected: Optional[bool] = None
    color_selected: Optional[bool] = None
    image_zoomed: Optional[bool] = None
    description_read: Optional[bool] = None
    reviews_read: Optional[bool] = None

    def true_count(self) -> int:
        return sum(1 for v in asdict(self).values() if v)


@dataclass(frozen=True)
class CartActions:
    added_to_cart: Optional[float] = None  # epoch ms
    removed_from_cart: Optional[float] = None  # epoch ms
    times_added_to_cart: Optional[int] = None
    times_removed_from_cart: Optional[int] = None


@dataclass(frozen=True)
class CheckoutActions:
    proceeded_to_checkout: Optional[bool] = None
    completed_purchase: Optional[bool] = None
    purchase_count: Optional[int] = None
    last_purchase_date: Optional[float] = None  # epoch ms


@dataclass(frozen=True)
class ProductInteraction:
    product_id: Optional[str] = None
    view_duration: Optional[float] = None  # seconds
    view_count: Optional[int] = None
    interactions: Optional[InteractionFlags] = None
    cart_actions: Optional[CartActions] = None
    checkout_actions: Optional[CheckoutActions] = None
    rating: Optional[float] = None  # 1-5
    timestamp: Optional[float] = None  # last activity, epoch ms


@dataclass
class UserBehavior:
    user_id: str
    viewed_products: List[str] = field(default_factory=list)
    purchased_products: List[str] = field(default_factory=list)
    cart_items: List[str] = field(default_factory=list)
    search_queries: List[str] = field(default_factory=list)
    ratings: Dict[str, float] = field(default_factory=dict)
    product_interactions: Optional[Dict[str, ProductInteraction]] = None
    session_duration: Optional[float] = None
    device_type: Optional[str] = None  # mobile | tablet | desktop
    location: Optional[str] = None
    time_of_day: Optional[str] = None  # morning | afternoon | evening | night


@dataclass(frozen=True)
class ScoreBreakdown:
    collaborative: float = 0.0
    content_based: float = 0.0
    context_aware: float = 0.0
    user_based: float = 0.0
    category_popularity: float = 0.0
    final: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "collaborative": self.collaborative,
            "contentBased": self.content_based,
            "contextAware": self.context_aware,
            "userBased": self.user_based,
            "categoryPopularity": self.category_popularity,
            "final": self.final,
        }


@dataclass(frozen=True)
class RecommendationResult:
    product_id: str
    score: float
    breakdown: ScoreBreakdown

    def to_frontend_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "score": self.score,
            "breakdown": self.breakdown.to_dict(),
        }
