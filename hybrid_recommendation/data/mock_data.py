from typing import List

from ..models.data_models import (
    CartActions,
    CheckoutActions,
    InteractionFlags,
    Product,
    ProductInteraction,
    UserBehavior,
)


def get_mock_products() -> List[Product]:
    return [
        Product(
            id="p1",
            name="Trail Running Shoes",
            category="Footwear",
            price=120.0,
            description="Lightweight running shoes with aggressive grip for muddy trails",
            tags=frozenset({"running", "outdoor", "sport"}),
        ),
        Product(
            id="p2",
            name="Road Running Shoes",
            category="Footwear",
            price=95.0,
            description="Cushioned running shoes for daily road training",
            tags=frozenset({"running", "sport"}),
        ),
        Product(
            id="p3",
            name="Merino Running Socks",
            category="Accessories",
            price=18.0,
            description="Breathable merino socks for long running sessions",
            tags=frozenset({"running", "wool"}),
        ),
        Product(
            id="p4",
            name="Waterproof Shell Jacket",
            category="Apparel",
            price=180.0,
            description="Packable waterproof jacket for trail and mountain weather",
            tags=frozenset({"outdoor", "rain"}),
        ),
        Product(
            id="p5",
            name="Hydration Vest",
            category="Accessories",
            price=75.0,
            description="Hydration vest with soft flasks for trail running",
            tags=frozenset({"running", "outdoor", "hydration"}),
        ),
        Product(
            id="p6",
            name="Yoga Mat",
            category="Fitness",
            price=40.0,
            description="Non-slip yoga mat with carrying strap",
            tags=frozenset({"yoga", "studio"}),
        ),
        Product(
            id="p7",
            name="GPS Sports Watch",
            category="Electronics",
            price=299.0,
            description="GPS watch with heart rate tracking for running and cycling",
            tags=frozenset({"running", "gps", "sport"}),
        ),
        Product(
            id="p8",
            name="Foam Roller",
            category="Fitness",
            price=30.0,
            description="High density foam roller for recovery after running",
            tags=frozenset({"recovery", "sport"}),
        ),
    ]


def get_mock_user_behavior() -> UserBehavior:
    return UserBehavior(
        user_id="user1",
        viewed_products=["p2", "p3"],
        purchased_products=[],
        cart_items=["p3"],
        product_interactions={
            "p1": ProductInteraction(
                product_id="p1",
                view_duration=95,
                view_count=4,
                interactions=InteractionFlags(size_selected=True, image_zoomed=True, reviews_read=True),
                cart_actions=CartActions(times_added_to_cart=1),
                checkout_actions=CheckoutActions(proceeded_to_checkout=True),
            ),
        },
        device_type="mobile",
        time_of_day="evening",
    )


def get_mock_user_behaviors() -> List[UserBehavior]:
    return [
        get_mock_user_behavior(),
        UserBehavior(
            user_id="user2",
            viewed_products=["p1", "p4"],
            purchased_products=["p1", "p5"],
            cart_items=["p7"],
            ratings={"p5": 5},
        ),
        UserBehavior(
            user_id="user3",
            viewed_products=["p2", "p8"],
            purchased_products=["p2", "p3"],
            cart_items=["p5"],
        ),
        UserBehavior(
            user_id="user4",
            viewed_products=["p6"],
            purchased_products=["p6", "p8"],
        ),
    ]
