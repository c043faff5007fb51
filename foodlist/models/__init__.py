"""init file for models module."""
from foodlist.models.profile import Profile
from foodlist.models.restaurants import (
    CuisineType,
    DietaryOption,
    Feature,
    Restaurant,
    RestaurantVisit,
)
from foodlist.models.reviews import Review
from foodlist.models.lists import RestaurantList
from foodlist.models.associations import (
    list_restaurants,
    restaurant_cuisine_types,
    restaurant_dietary_options,
    restaurant_features,
)


__all__ = [
    "Profile",
    "CuisineType",
    "DietaryOption",
    "Feature",
    "Restaurant",
    "RestaurantVisit",
    "Review",
    "RestaurantList",
    "list_restaurants",
    "restaurant_cuisine_types",
    "restaurant_dietary_options",
    "restaurant_features",
]
