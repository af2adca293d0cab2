"""
Schemas for the JSON payload produced by the upstream parser.

Field names follow the storefront's camelCase wire format; the loader turns
validated payloads into the dataclasses in ``data_models``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProductPayload(_Payload):
    id: str
    name: str
    category: str
    price: float = Field(ge=0)
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    attributes: Optional[Dict[str, Any]] = None
    image: Optional[str] = None


class InteractionFlagsPayload(_Payload):
    size_selected: Optional[bool] = Field(None, alias="sizeSelected")
    color_selected: Optional[bool] = Field(None, alias="colorSelected")
    image_zoomed: Optional[bool] = Field(None, alias="imageZoomed")
    description_read: Optional[bool] = Field(None, alias="descriptionRead")
    reviews_read: Optional[bool] = Field(None, alias="reviewsRead")


class CartActionsPayload(_Payload):
    added_to_cart: Optional[float] = Field(None, alias="addedToCart")
    removed_from_cart: Optional[float] = Field(None, alias="removedFromCart")
    times_added_to_cart: Optional[int] = Field(None, alias="timesAddedToCart")
    times_removed_from_cart: Optional[int] = Field(None, alias="timesRemovedFromCart")


class CheckoutActionsPayload(_Payload):
    proceeded_to_checkout: Optional[bool] = Field(None, alias="proceededToCheckout")
    completed_purchase: Optional[bool] = Field(None, alias="completedPurchase")
    purchase_count: Optional[int] = Field(None, alias="purchaseCount")
    last_purchase_date: Optional[float] = Field(None, alias="lastPurchaseDate")


class ProductInteractionPayload(_Payload):
    product_id: Optional[str] = Field(None, alias="productId")
    view_duration: Optional[float] = Field(None, alias="viewDuration")
    view_count: Optional[int] = Field(None, alias="viewCount")
    interactions: Optional[InteractionFlagsPayload] = None
    cart_actions: Optional[CartActionsPayload] = Field(None, alias="cartActions")
    checkout_actions: Optional[CheckoutActionsPayload] = Field(None, alias="checkoutActions")
    rating: Optional[float] = None
    timestamp: Optional[float] = None


class UserBehaviorPayload(_Payload):
    user_id: Optional[str] = Field(None, alias="userId")
    viewed_products: Optional[List[str]] = Field(None, alias="viewedProducts")
    purchased_products: Optional[List[str]] = Field(None, alias="purchasedProducts")
    cart_items: Optional[List[str]] = Field(None, alias="cartItems")
    search_queries: Optional[List[str]] = Field(None, alias="searchQueries")
    ratings: Optional[Dict[str, float]] = None
    product_interactions: Optional[Dict[str, ProductInteractionPayload]] = Field(
        None, alias="productInteractions"
    )
    session_duration: Optional[float] = Field(None, alias="sessionDuration")
    device_type: Optional[Literal["mobile", "tablet", "desktop"]] = Field(None, alias="deviceType")
    location: Optional[str] = None
    time_of_day: Optional[Literal["morning", "afternoon", "evening", "night"]] = Field(
        None, alias="timeOfDay"
    )
