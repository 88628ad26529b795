"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services free of
SQLAlchemy details and routes focused on HTTP handling. Each repository wraps
the request's AsyncSession and never commits.
"""

from repositories.achievement_repository import (
    AchievementRepository,
    UserAchievementRepository,
)
from repositories.activity_log_repository import ActivityLogRepository
from repositories.base import BaseRepository
from repositories.category_repository import (
    CategoryRepository,
    ServiceCategoryRepository,
)
from repositories.conversation_repository import (
    ConversationParticipantRepository,
    ConversationRepository,
)
from repositories.message_repository import MessageRepository
from repositories.review_repository import RatingSummary, ReviewRepository
from repositories.service_repository import ServiceRepository
from repositories.service_request_repository import ServiceRequestRepository
from repositories.skill_repository import FreelancerSkillRepository, SkillRepository
from repositories.transaction_repository import TransactionRepository
from repositories.user_repository import UserRepository
from repositories.utils import log_slow_query

__all__ = [
    "AchievementRepository",
    "ActivityLogRepository",
    "BaseRepository",
    "CategoryRepository",
    "ConversationParticipantRepository",
    "ConversationRepository",
    "FreelancerSkillRepository",
    "MessageRepository",
    "RatingSummary",
    "ReviewRepository",
    "ServiceCategoryRepository",
    "ServiceRepository",
    "ServiceRequestRepository",
    "SkillRepository",
    "TransactionRepository",
    "UserAchievementRepository",
    "UserRepository",
    "log_slow_query",
]
