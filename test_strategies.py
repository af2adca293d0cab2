from math import log

import numpy as np
import pytest

from hybrid_recommendation.hybrid.content_based import content_based_scores
from hybrid_recommendation.hybrid.context_aware import context_aware_scores
from hybrid_recommendation.hybrid.item_based import collaborative_scores
from hybrid_recommendation.hybrid.user_based import (
    category_popularity_scores,
    find_similar_users,
    user_based_scores,
)
from hybrid_recommendation.models.data_models import (
    CheckoutActions,
    Product,
    ProductInteraction,
    UserBehavior,
)

NOW_MS = 1_700_000_000_000.0
VIEW_ONCE = 0.04  # engagement of a single legacy view


@pytest.fixture
def catalog():
    return [
        Product(
            id="a", name="Trail Shoe", category="Shoes", price=100.0,
            description="lightweight running shoes", tags=frozenset({"run", "sport"}),
        ),
        Product(
            id="b", name="Road Shoe", category="Shoes", price=50.0,
            description="cushioned running shoes", tags=frozenset({"run"}),
        ),
        Product(id="c", name="Cookbook", category="Books", price=20.0),
    ]


@pytest.fixture
def viewer():
    return UserBehavior(user_id="t", viewed_products=["a"])


# ------------------------------------------------------
# Content-based
# ------------------------------------------------------
def test_content_based_similarity(catalog, viewer):
    scores = content_based_scores(catalog, viewer, NOW_MS)

    assert set(scores) == {"b", "c"}
    # category + one tag + price ratio 0.5 + two shared words
    assert scores["b"] == pytest.approx(0.5 + 0.15 + 0.5 * 0.25 + 2 * 0.05)
    assert scores["c"] == pytest.approx(0.2 * 0.25)


def test_content_based_without_history_is_empty(catalog):
    assert content_based_scores(catalog, UserBehavior(user_id="t"), NOW_MS) == {}


def test_content_based_skips_zero_engagement(catalog):
    # an empty record carries zero engagement
    behavior = UserBehavior(
        user_id="t",
        product_interactions={"a": ProductInteraction(product_id="a", view_count=0)},
    )
    assert content_based_scores(catalog, behavior, NOW_MS) == {}


def test_content_based_ignores_unknown_ids(catalog):
    behavior = UserBehavior(user_id="t", viewed_products=["a", "ghost"])
    assert content_based_scores(catalog, behavior, NOW_MS)["b"] == pytest.approx(0.875)


# ------------------------------------------------------
# Item-based collaborative
# ------------------------------------------------------
def test_item_based_profile(catalog, viewer):
    scores = collaborative_scores(catalog, viewer, NOW_MS)

    expected_b = VIEW_ONCE * 0.4 + (1 / (1 + 50 / 100)) * 0.3 + (0.5 + 0.1) * VIEW_ONCE * 0.3
    expected_c = (1 / (1 + 80 / 100)) * 0.3
    assert scores == pytest.approx({"b": expected_b, "c": expected_c})


def test_item_based_without_history_scores_zero(catalog):
    scores = collaborative_scores(catalog, UserBehavior(user_id="t"), NOW_MS)
    assert scores == {"a": 0.0, "b": 0.0, "c": 0.0}


# ------------------------------------------------------
# Context-aware
# ------------------------------------------------------
def test_context_price_band_and_mobile(catalog):
    behavior = UserBehavior(user_id="t", viewed_products=["a"], device_type="mobile")
    scores = context_aware_scores(catalog, behavior, jitter=0.0, now_ms=NOW_MS)

    assert scores["b"] == pytest.approx((1 / 1.5) * 0.3 + 0.1)
    assert scores["c"] == pytest.approx((1 / 1.8) * 0.3 + 0.1)
    assert "a" not in scores


def test_context_checkout_band_and_evening():
    catalog = [
        Product(id="a", name="A", category="Shoes", price=100.0),
        Product(id="d", name="D", category="Shoes", price=110.0),
        Product(id="e", name="E", category="Shoes", price=150.0),
    ]
    behavior = UserBehavior(
        user_id="t",
        time_of_day="evening",
        product_interactions={
            "a": ProductInteraction(product_id="a", checkout_actions=CheckoutActions(proceeded_to_checkout=True)),
        },
    )
    scores = context_aware_scores(catalog, behavior, jitter=0.0, now_ms=NOW_MS)

    assert scores["d"] == pytest.approx((1 / 1.1) * 0.3 + 0.3 + 0.15)
    assert scores["e"] == pytest.approx((1 / 1.5) * 0.3 + 0.15)


def test_context_premium_boost_for_high_engagement():
    catalog = [
        Product(id="a", name="A", category="Shoes", price=100.0),
        Product(id="p", name="P", category="Shoes", price=300.0),
    ]
    behavior = UserBehavior(user_id="t", purchased_products=["a"])
    scores = context_aware_scores(catalog, behavior, jitter=0.0, now_ms=NOW_MS)

    assert scores["p"] == pytest.approx((1 / 3.0) * 0.3 + 0.25)


def test_context_seeded_randomness_is_reproducible(catalog, viewer):
    first = context_aware_scores(catalog, viewer, rng=np.random.default_rng(7), now_ms=NOW_MS)
    second = context_aware_scores(catalog, viewer, rng=np.random.default_rng(7), now_ms=NOW_MS)
    base = context_aware_scores(catalog, viewer, jitter=0.0, now_ms=NOW_MS)

    assert first == second
    for product_id, score in first.items():
        assert base[product_id] <= score < base[product_id] + 0.2


# ------------------------------------------------------
# User-based collaborative / category popularity
# ------------------------------------------------------
@pytest.fixture
def roster(viewer):
    return [
        viewer,
        UserBehavior(user_id="u1", viewed_products=["a", "b"]),
        UserBehavior(user_id="u2", viewed_products=["c"]),
    ]


def test_similar_users_skip_target_and_unrelated(catalog, viewer, roster):
    similar = find_similar_users(catalog, viewer, roster, NOW_MS)

    assert [behavior.user_id for behavior, _ in similar] == ["u1"]
    # shared view + category ratio 0.5 doubled, boosted by one common product
    assert similar[0][1] == pytest.approx((VIEW_ONCE + 0.5 * 2) * (1 + log(2)))


def test_user_based_scores(catalog, viewer, roster):
    scores = user_based_scores(catalog, viewer, roster, NOW_MS)

    similarity = (VIEW_ONCE + 1.0) * (1 + log(2))
    assert scores == pytest.approx({"b": VIEW_ONCE * similarity + log(2) * 0.2})


def test_user_based_needs_other_users(catalog, viewer):
    assert user_based_scores(catalog, viewer, [], NOW_MS) == {}
    assert user_based_scores(catalog, viewer, [viewer], NOW_MS) == {}


def test_user_based_keeps_top_similar_users(catalog, viewer):
    others = [UserBehavior(user_id=f"o{i}", viewed_products=["a", "b"] + ["c"] * (i % 2)) for i in range(15)]
    similar = find_similar_users(catalog, viewer, [viewer] + others, NOW_MS, top_k=10)
    assert len(similar) == 10
    assert [s for _, s in similar] == sorted((s for _, s in similar), reverse=True)


def test_category_popularity(catalog, viewer, roster):
    catalog = catalog + [Product(id="d", name="Unseen Shoe", category="Shoes", price=70.0)]
    scores = category_popularity_scores(catalog, viewer, roster, NOW_MS)

    # only "b" is both untouched by the target and referenced by someone
    assert scores == pytest.approx({"b": (VIEW_ONCE / 3) * VIEW_ONCE})
    assert "d" not in scores
    assert "c" not in scores
