"""Service layer for business logic.

Services encapsulate the marketplace rules, keeping routes thin and focused
on HTTP handling.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Resolve identifiers and raise NotFoundError for unknown ones
- Enforce cross-entity rules (freelancer ownership, one review per project,
  one pending request per service, one-way transaction status)
- Orchestrate calls to repositories

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
- Commit the session (the request dependency owns the transaction)
"""

from services.achievements_service import AchievementsService
from services.activity_logs_service import ActivityLogsService
from services.catalog_service import CatalogService
from services.categories_service import CategoriesService
from services.conversations_service import ConversationsService
from services.messages_service import MessagesService
from services.profiles_service import ProfilesService
from services.reviews_service import ReviewsService
from services.service_requests_service import ServiceRequestsService
from services.skills_service import SkillsService
from services.transactions_service import TransactionsService
from services.users_service import UsersService

__all__ = [
    "AchievementsService",
    "ActivityLogsService",
    "CatalogService",
    "CategoriesService",
    "ConversationsService",
    "MessagesService",
    "ProfilesService",
    "ReviewsService",
    "ServiceRequestsService",
    "SkillsService",
    "TransactionsService",
    "UsersService",
]
