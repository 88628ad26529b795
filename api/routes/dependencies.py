"""FastAPI dependency providers wiring services to the request session.

Every provider takes the same ``DbSession``; FastAPI caches it per request,
so all repositories in one request share one transaction.
"""

from typing import Annotated

from fastapi import Depends

from core.database import DbSession
from repositories import (
    AchievementRepository,
    ActivityLogRepository,
    CategoryRepository,
    ConversationParticipantRepository,
    ConversationRepository,
    FreelancerSkillRepository,
    MessageRepository,
    ReviewRepository,
    ServiceCategoryRepository,
    ServiceRepository,
    ServiceRequestRepository,
    SkillRepository,
    TransactionRepository,
    UserAchievementRepository,
    UserRepository,
)
from services import (
    AchievementsService,
    ActivityLogsService,
    CatalogService,
    CategoriesService,
    ConversationsService,
    MessagesService,
    ProfilesService,
    ReviewsService,
    ServiceRequestsService,
    SkillsService,
    TransactionsService,
    UsersService,
)


def get_users_service(db: DbSession) -> UsersService:
    return UsersService(UserRepository(db))


def get_catalog_service(db: DbSession) -> CatalogService:
    return CatalogService(ServiceRepository(db), UserRepository(db))


def get_service_requests_service(db: DbSession) -> ServiceRequestsService:
    return ServiceRequestsService(
        ServiceRequestRepository(db), ServiceRepository(db), UserRepository(db)
    )


def get_categories_service(db: DbSession) -> CategoriesService:
    return CategoriesService(
        CategoryRepository(db), ServiceCategoryRepository(db), ServiceRepository(db)
    )


def get_skills_service(db: DbSession) -> SkillsService:
    return SkillsService(
        SkillRepository(db), FreelancerSkillRepository(db), UserRepository(db)
    )


def get_conversations_service(db: DbSession) -> ConversationsService:
    return ConversationsService(
        ConversationRepository(db),
        ConversationParticipantRepository(db),
        UserRepository(db),
        MessageRepository(db),
    )


def get_messages_service(db: DbSession) -> MessagesService:
    return MessagesService(
        MessageRepository(db), ConversationRepository(db), UserRepository(db)
    )


def get_transactions_service(db: DbSession) -> TransactionsService:
    return TransactionsService(TransactionRepository(db), UserRepository(db))


def get_reviews_service(db: DbSession) -> ReviewsService:
    return ReviewsService(ReviewRepository(db), UserRepository(db))


def get_achievements_service(db: DbSession) -> AchievementsService:
    return AchievementsService(
        AchievementRepository(db), UserAchievementRepository(db), UserRepository(db)
    )


def get_activity_logs_service(db: DbSession) -> ActivityLogsService:
    return ActivityLogsService(ActivityLogRepository(db), UserRepository(db))


def get_profiles_service(db: DbSession) -> ProfilesService:
    return ProfilesService(
        UserRepository(db),
        FreelancerSkillRepository(db),
        ServiceRepository(db),
        ReviewRepository(db),
    )


UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
ServiceRequestsServiceDep = Annotated[
    ServiceRequestsService, Depends(get_service_requests_service)
]
CategoriesServiceDep = Annotated[CategoriesService, Depends(get_categories_service)]
SkillsServiceDep = Annotated[SkillsService, Depends(get_skills_service)]
ConversationsServiceDep = Annotated[
    ConversationsService, Depends(get_conversations_service)
]
MessagesServiceDep = Annotated[MessagesService, Depends(get_messages_service)]
TransactionsServiceDep = Annotated[
    TransactionsService, Depends(get_transactions_service)
]
ReviewsServiceDep = Annotated[ReviewsService, Depends(get_reviews_service)]
AchievementsServiceDep = Annotated[
    AchievementsService, Depends(get_achievements_service)
]
ActivityLogsServiceDep = Annotated[
    ActivityLogsService, Depends(get_activity_logs_service)
]
ProfilesServiceDep = Annotated[ProfilesService, Depends(get_profiles_service)]
