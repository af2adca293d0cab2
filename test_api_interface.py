import pytest

from hybrid_recommendation.data.loader import InvalidPayloadError, PayloadLoader
from hybrid_recommendation.hybrid.recommender import HybridRecommender
from hybrid_recommendation.interface.api_interface import (
    build_cart_summary,
    classify_recommendation_type,
    get_user_recommendations,
)
from hybrid_recommendation.models.data_models import ScoreBreakdown

NOW_MS = 1_700_000_000_000.0

PRODUCTS = [
    {"id": "p1", "name": "Trail Shoe", "category": "Shoes", "price": 120, "tags": ["run", "outdoor"],
     "description": "grippy trail running shoe"},
    {"id": "p2", "name": "Road Shoe", "category": "Shoes", "price": 90, "tags": ["run"],
     "description": "cushioned road running shoe"},
    {"id": "p3", "name": "Socks", "category": "Accessories", "price": 15, "tags": ["run"]},
    {"id": "p4", "name": "Rain Jacket", "category": "Apparel", "price": 160, "tags": ["outdoor"]},
]

USER = {
    "userId": "alice",
    "viewedProducts": ["p2", "ghost"],
    "cartItems": ["p3"],
    "productInteractions": {
        "p1": {
            "viewDuration": 80,
            "viewCount": 3,
            "interactions": {"sizeSelected": True, "reviewsRead": True},
            "cartActions": {"timesAddedToCart": 2},
            "checkoutActions": {"proceededToCheckout": True},
        },
    },
    "deviceType": "desktop",
    "timeOfDay": "evening",
}


def test_loader_parses_camel_case_payload():
    behavior = PayloadLoader().load_user_behavior(USER)
    interaction = behavior.product_interactions["p1"]

    assert behavior.user_id == "alice"
    assert behavior.purchased_products == []
    assert interaction.product_id == "p1"
    assert interaction.cart_actions.times_added_to_cart == 2
    assert interaction.checkout_actions.proceeded_to_checkout is True
    assert interaction.interactions.true_count() == 2


def test_loader_fills_default_user_ids():
    loader = PayloadLoader()
    assert loader.load_user_behavior({}).user_id == "user1"
    roster = loader.load_user_behaviors([{}, {"userId": "bob"}])
    assert roster[0].user_id.startswith("user-")
    assert roster[1].user_id == "bob"


def test_loader_converts_tags_to_set():
    products = PayloadLoader().load_products(PRODUCTS)
    assert products[0].tags == frozenset({"run", "outdoor"})
    assert products[2].description is None


@pytest.mark.parametrize(
    "products",
    [
        {"id": "p1"},
        [{"id": "p1", "name": "x", "category": "c", "price": -1}],
        [{"id": "p1", "category": "c", "price": 1}],
    ],
)
def test_loader_rejects_malformed_catalog(products):
    with pytest.raises(InvalidPayloadError):
        PayloadLoader().load_products(products)


def test_loader_rejects_unknown_device():
    with pytest.raises(InvalidPayloadError):
        PayloadLoader().load_user_behavior({"userId": "u", "deviceType": "smart-fridge"})


def test_unknown_ids_are_reported():
    loader = PayloadLoader()
    unknown = loader.find_unknown_product_ids(loader.load_products(PRODUCTS), loader.load_user_behavior(USER))
    assert unknown == {"viewed_products": ["ghost"]}


def test_classify_recommendation_type():
    assert classify_recommendation_type(ScoreBreakdown(collaborative=0.5, content_based=0.2, context_aware=0.1)) == "collaborative"
    assert classify_recommendation_type(ScoreBreakdown(collaborative=0.1, content_based=0.6, context_aware=0.1)) == "content-based"
    assert classify_recommendation_type(ScoreBreakdown(collaborative=0.1, content_based=0.2, context_aware=0.3)) == "trending"
    assert classify_recommendation_type(ScoreBreakdown(collaborative=0.3, content_based=0.3, context_aware=0.1)) == "hybrid"


def test_cart_summary():
    loader = PayloadLoader()
    summary = build_cart_summary(loader.load_products(PRODUCTS), loader.load_user_behavior(USER))
    assert summary["count"] == 1
    assert summary["total_value"] == 15
    assert summary["items"][0]["id"] == "p3"


def test_get_user_recommendations_single_user():
    response = get_user_recommendations(
        PRODUCTS, USER, limit=5, recommender=HybridRecommender(jitter=0.0), now_ms=NOW_MS
    )

    assert response["user_id"] == "alice"
    assert response["mode"] == "single_user"
    assert response["count"] == len(response["results"]) == 1
    assert response["ignored_product_ids"] == {"viewed_products": ["ghost"]}

    top = response["results"][0]
    assert top["productId"] == "p4"
    assert top["product"]["name"] == "Rain Jacket"
    assert top["recommendationType"] in {"collaborative", "content-based", "trending", "hybrid"}
    assert top["breakdown"]["final"] == top["score"]


def test_get_user_recommendations_multi_user():
    roster = [
        USER,
        {"userId": "bob", "viewedProducts": ["p1"], "purchasedProducts": ["p1", "p4"]},
        {"userId": "carol", "purchasedProducts": ["p2", "p4"]},
    ]
    response = get_user_recommendations(
        PRODUCTS, USER, roster, recommender=HybridRecommender(jitter=0.0), now_ms=NOW_MS
    )

    assert response["mode"] == "multi_user"
    assert [r["productId"] for r in response["results"]] == ["p4"]
    assert response["results"][0]["breakdown"]["userBased"] > 0


def test_get_user_recommendations_rejects_bad_payload():
    with pytest.raises(InvalidPayloadError):
        get_user_recommendations("not a catalog", USER)
