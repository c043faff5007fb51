from .lists import router as lists_router
from .profile import router as profile_router
from .restaurants import router as restaurants_router
from .reviews import router as reviews_router
from .taxonomies import (
    cuisine_types_router,
    dietary_options_router,
    features_router,
)
from .users import router as users_router

__all__ = [
    "lists_router",
    "profile_router",
    "restaurants_router",
    "reviews_router",
    "cuisine_types_router",
    "dietary_options_router",
    "features_router",
    "users_router",
]
