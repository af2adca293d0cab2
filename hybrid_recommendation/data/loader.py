from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from ..models.data_models import (
    CartActions,
    CheckoutActions,
    InteractionFlags,
    Product,
    ProductInteraction,
    UserBehavior,
)
from ..models.schemas import (
    ProductInteractionPayload,
    ProductPayload,
    UserBehaviorPayload,
)

logger = logging.getLogger(__name__)

DEFAULT_TARGET_USER_ID = "user1"

_PRODUCT_LIST = TypeAdapter(List[ProductPayload])
_BEHAVIOR_LIST = TypeAdapter(List[UserBehaviorPayload])


class InvalidPayloadError(ValueError):
    """Raised when the upstream payload does not match the expected shape."""


class PayloadLoader:
    """
    Parsed JSON payload → Product / UserBehavior dataclasses.

    Missing behavior lists become empty lists and missing user ids get a
    default, so the engine always receives a complete record.
    """

    # ------------------------------------------------------
    # Payload → dataclass conversion
    # ------------------------------------------------------
    @staticmethod
    def _doc_to_product(doc: ProductPayload) -> Product:
        return Product(
            id=doc.id,
            name=doc.name,
            category=doc.category,
            price=doc.price,
            description=doc.description,
            tags=frozenset(doc.tags or []),
            attributes=doc.attributes,
            image=doc.image,
        )

    @staticmethod
    def _doc_to_interaction(product_id: str, doc: ProductInteractionPayload) -> ProductInteraction:
        flags = doc.interactions
        cart = doc.cart_actions
        checkout = doc.checkout_actions
        return ProductInteraction(
            product_id=doc.product_id or product_id,
            view_duration=doc.view_duration,
            view_count=doc.view_count,
            interactions=InteractionFlags(**flags.model_dump()) if flags else None,
            cart_actions=CartActions(**cart.model_dump()) if cart else None,
            checkout_actions=CheckoutActions(**checkout.model_dump()) if checkout else None,
            rating=doc.rating,
            timestamp=doc.timestamp,
        )

    @staticmethod
    def _doc_to_behavior(doc: UserBehaviorPayload, default_user_id: str) -> UserBehavior:
        interactions = None
        if doc.product_interactions is not None:
            interactions = {
                pid: PayloadLoader._doc_to_interaction(pid, item)
                for pid, item in doc.product_interactions.items()
            }
        return UserBehavior(
            user_id=doc.user_id or default_user_id,
            viewed_products=list(doc.viewed_products or []),
            purchased_products=list(doc.purchased_products or []),
            cart_items=list(doc.cart_items or []),
            search_queries=list(doc.search_queries or []),
            ratings=dict(doc.ratings or {}),
            product_interactions=interactions,
            session_duration=doc.session_duration,
            device_type=doc.device_type,
            location=doc.location,
            time_of_day=doc.time_of_day,
        )

    # ------------------------------------------------------
    # Public loaders
    # ------------------------------------------------------
    def load_products(self, docs: Any) -> List[Product]:
        try:
            payloads = _PRODUCT_LIST.validate_python(docs)
        except ValidationError as e:
            raise InvalidPayloadError(f"invalid product catalog: {e}") from e
        return [self._doc_to_product(p) for p in payloads]

    def load_user_behavior(self, doc: Any, default_user_id: str = DEFAULT_TARGET_USER_ID) -> UserBehavior:
        try:
            payload = UserBehaviorPayload.model_validate(doc)
        except ValidationError as e:
            raise InvalidPayloadError(f"invalid user behavior: {e}") from e
        return self._doc_to_behavior(payload, default_user_id)

    def load_user_behaviors(self, docs: Any) -> List[UserBehavior]:
        try:
            payloads = _BEHAVIOR_LIST.validate_python(docs)
        except ValidationError as e:
            raise InvalidPayloadError(f"invalid user roster: {e}") from e
        return [self._doc_to_behavior(p, f"user-{uuid4()}") for p in payloads]

    # ------------------------------------------------------
    # Diagnostics: behavior ids that are not in the catalog
    # ------------------------------------------------------
    @staticmethod
    def find_unknown_product_ids(
        products: Iterable[Product],
        behavior: UserBehavior,
    ) -> Dict[str, List[str]]:
        known = {p.id for p in products}
        lists: Mapping[str, Sequence[str]] = {
            "viewed_products": behavior.viewed_products,
            "purchased_products": behavior.purchased_products,
            "cart_items": behavior.cart_items,
            "product_interactions": list((behavior.product_interactions or {}).keys()),
        }

        unknown: Dict[str, List[str]] = {}
        for label, ids in lists.items():
            invalid = [pid for pid in ids if pid not in known]
            if invalid:
                logger.warning(
                    f"[Loader] user={behavior.user_id} {label}: "
                    f"{len(ids) - len(invalid)}/{len(ids)} valid, ignored={invalid}"
                )
                unknown[label] = invalid
        return unknown


def load_payload(
    products_doc: Any,
    user_behavior_doc: Any,
    all_user_behaviors_doc: Optional[Any] = None,
    loader: Optional[PayloadLoader] = None,
):
    loader = loader or PayloadLoader()
    products = loader.load_products(products_doc)
    behavior = loader.load_user_behavior(user_behavior_doc)
    roster = None
    if all_user_behaviors_doc is not None:
        roster = loader.load_user_behaviors(all_user_behaviors_doc)
    return products, behavior, roster
