"""API route modules."""

from routes.achievements_routes import awards_router as user_achievements_router
from routes.achievements_routes import router as achievements_router
from routes.activity_logs_routes import router as activity_logs_router
from routes.categories_routes import links_router as service_categories_router
from routes.categories_routes import router as categories_router
from routes.conversations_routes import router as conversations_router
from routes.health_routes import router as health_router
from routes.messages_routes import router as messages_router
from routes.profiles_routes import router as profiles_router
from routes.reviews_routes import router as reviews_router
from routes.service_requests_routes import router as service_requests_router
from routes.services_routes import router as services_router
from routes.skills_routes import freelancer_router as freelancer_skills_router
from routes.skills_routes import router as skills_router
from routes.transactions_routes import router as transactions_router
from routes.users_routes import router as users_router

__all__ = [
    "achievements_router",
    "activity_logs_router",
    "categories_router",
    "conversations_router",
    "freelancer_skills_router",
    "health_router",
    "messages_router",
    "profiles_router",
    "reviews_router",
    "service_categories_router",
    "service_requests_router",
    "services_router",
    "skills_router",
    "transactions_router",
    "user_achievements_router",
    "users_router",
]
