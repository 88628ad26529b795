"""Pydantic schemas for API request/response validation.

Create DTOs list required fields; Update DTOs make every field optional so a
PATCH only touches what the client sent. Update DTOs forbid unknown fields, so
immutable columns (wallet_address, is_freelancer, freelancer_id) cannot be
sent in a PATCH and silently ignored.
"""

import re
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
)

from models import (
    ExperienceLevel,
    ServiceRequestStatus,
    TransactionStatus,
    TransactionType,
    UserRole,
)

DataT = TypeVar("DataT")

WALLET_ADDRESS_PATTERNS = {
    "ethereum": re.compile(r"^0x[a-fA-F0-9]{40}$"),
    "stellar": re.compile(r"^[1-9A-HJ-NP-Za-km-z]{56}$"),
    "bitcoin": re.compile(r"^[13][a-km-zA-HJ-NP-Z1-9]{25,34}$"),
}
USERNAME_PATTERN = r"^[a-zA-Z0-9_-]{3,20}$"
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
MAX_AMOUNT = Decimal("1000000000")

Username = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=USERNAME_PATTERN)
]
ShortText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]
LongText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=5000)
]
Price = Annotated[Decimal, Field(gt=0, le=MAX_AMOUNT, decimal_places=2)]
Amount = Annotated[Decimal, Field(gt=0, le=MAX_AMOUNT, decimal_places=6)]
Currency = Annotated[str, StringConstraints(pattern=r"^[A-Z]{3,10}$")]
Score = Annotated[int, Field(ge=1, le=5)]
DeliveryDays = Annotated[int, Field(ge=1, le=365)]

# Money goes out as a JSON number so a client reads back what it sent.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


def validate_wallet_address(value: str) -> str:
    value = value.strip()
    if not any(p.match(value) for p in WALLET_ADDRESS_PATTERNS.values()):
        raise ValueError(
            "wallet_address must be an Ethereum, Stellar or Bitcoin address"
        )
    return value


def validate_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("email is not a valid address")
    return value


WalletAddress = Annotated[str, AfterValidator(validate_wallet_address)]
Email = Annotated[str, AfterValidator(validate_email)]


# =============================================================================
# Envelope
# =============================================================================


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by every endpoint that returns a body."""

    success: bool = True
    message: str
    data: DataT


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    code: str
    details: Any = None


class UpdateModel(BaseModel):
    """Base for PATCH bodies: unknown fields are rejected, not dropped."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Users
# =============================================================================


class UserCreate(BaseModel):
    wallet_address: WalletAddress
    username: Username
    name: ShortText | None = None
    email: Email | None = None
    bio: LongText | None = None
    is_freelancer: bool = False


class UserUpdate(UpdateModel):
    username: Username | None = None
    name: ShortText | None = None
    email: Email | None = None
    bio: LongText | None = None
    role: UserRole | None = None
    is_active: bool | None = None
    two_factor_enabled: bool | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    wallet_address: str
    username: str
    name: str | None = None
    email: str | None = None
    bio: str | None = None
    is_freelancer: bool
    role: UserRole
    is_active: bool
    two_factor_enabled: bool
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Services
# =============================================================================


class ServiceCreate(BaseModel):
    freelancer_id: uuid.UUID
    title: ShortText
    description: LongText | None = None
    base_price: Price
    delivery_time_days: DeliveryDays


class ServiceUpdate(UpdateModel):
    title: ShortText | None = None
    description: LongText | None = None
    base_price: Price | None = None
    delivery_time_days: DeliveryDays | None = None
    is_active: bool | None = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    freelancer_id: uuid.UUID
    title: str
    description: str | None = None
    base_price: JsonDecimal
    delivery_time_days: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ServiceFilters(BaseModel):
    """Query parameters accepted by GET /services."""

    freelancer_id: uuid.UUID | None = None
    is_active: bool | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)
    keyword: str | None = Field(default=None, max_length=100)


# =============================================================================
# Service requests
# =============================================================================


def validate_request_answer(value: ServiceRequestStatus) -> ServiceRequestStatus:
    if value == ServiceRequestStatus.PENDING:
        raise ValueError("status must be accepted or rejected")
    return value


class ServiceRequestCreate(BaseModel):
    service_id: uuid.UUID
    client_id: uuid.UUID
    message: LongText


class ServiceRequestStatusUpdate(UpdateModel):
    """The freelancer's answer. ``freelancer_id`` must own the service."""

    status: Annotated[ServiceRequestStatus, AfterValidator(validate_request_answer)]
    freelancer_id: uuid.UUID


class ServiceRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    service_id: uuid.UUID
    client_id: uuid.UUID
    message: str
    status: ServiceRequestStatus
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Categories
# =============================================================================


class CategoryCreate(BaseModel):
    name: ShortText
    description: LongText | None = None


class CategoryUpdate(UpdateModel):
    name: ShortText | None = None
    description: LongText | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    created_at: datetime


class ServiceCategoryCreate(BaseModel):
    service_id: uuid.UUID
    category_id: uuid.UUID


class ServiceCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    service_id: uuid.UUID
    category_id: uuid.UUID
    created_at: datetime


# =============================================================================
# Skills
# =============================================================================


class SkillCreate(BaseModel):
    name: ShortText


class SkillUpdate(UpdateModel):
    name: ShortText | None = None


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    created_at: datetime


class FreelancerSkillCreate(BaseModel):
    user_id: uuid.UUID
    skill_id: uuid.UUID
    experience_level: ExperienceLevel


class FreelancerSkillUpdate(UpdateModel):
    experience_level: ExperienceLevel | None = None


class FreelancerSkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    skill_id: uuid.UUID
    experience_level: ExperienceLevel
    created_at: datetime


# =============================================================================
# Conversations & messages
# =============================================================================


class ConversationCreate(BaseModel):
    participant_ids: list[uuid.UUID] = Field(default_factory=list, max_length=50)


class ConversationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    last_message_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    # Only filled when listing for a user: messages from others still unread.
    unread_count: int | None = None


class ParticipantCreate(BaseModel):
    user_id: uuid.UUID


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    conversation_id: uuid.UUID
    user_id: uuid.UUID
    joined_at: datetime


class MessageCreate(BaseModel):
    conversation_id: uuid.UUID
    sender_id: uuid.UUID
    content: LongText


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    conversation_id: uuid.UUID
    sender_id: uuid.UUID
    content: str
    read_at: datetime | None = None
    created_at: datetime


class MarkConversationReadRequest(BaseModel):
    """The reader; messages they sent themselves stay untouched."""

    user_id: uuid.UUID


class MarkReadResult(BaseModel):
    updated: int


# =============================================================================
# Transactions
# =============================================================================


class TransactionCreate(BaseModel):
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    project_id: uuid.UUID | None = None
    amount: Amount
    currency: Currency = "USD"
    transaction_hash: str | None = Field(default=None, min_length=1, max_length=128)
    type: TransactionType


class TransactionUpdate(UpdateModel):
    status: TransactionStatus | None = None
    transaction_hash: str | None = Field(default=None, min_length=1, max_length=128)


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    project_id: uuid.UUID | None = None
    amount: JsonDecimal
    currency: str
    transaction_hash: str | None = None
    status: TransactionStatus
    type: TransactionType
    created_at: datetime
    completed_at: datetime | None = None


# =============================================================================
# Reviews
# =============================================================================


class ReviewCreate(BaseModel):
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    project_id: uuid.UUID | None = None
    score: Score
    comment: LongText | None = None


class ReviewUpdate(UpdateModel):
    score: Score | None = None
    comment: LongText | None = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    project_id: uuid.UUID | None = None
    score: int
    comment: str | None = None
    created_at: datetime


# =============================================================================
# Achievements
# =============================================================================


class AchievementCreate(BaseModel):
    name: ShortText
    description: LongText | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    points: int = Field(default=0, ge=0)


class AchievementUpdate(UpdateModel):
    name: ShortText | None = None
    description: LongText | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    points: int | None = Field(default=None, ge=0)


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    image_url: str | None = None
    points: int
    created_at: datetime


class UserAchievementCreate(BaseModel):
    user_id: uuid.UUID
    achievement_id: uuid.UUID
    nft_token_id: str | None = Field(default=None, max_length=255)


class UserAchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    achievement_id: uuid.UUID
    nft_token_id: str | None = None
    earned_at: datetime


# =============================================================================
# Activity logs
# =============================================================================


class ActivityLogCreate(BaseModel):
    user_id: uuid.UUID
    action_type: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)
    ]
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: str | None = Field(default=None, max_length=100)
    details: dict[str, Any] | None = None
    ip_address: str | None = Field(default=None, max_length=45)


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    action_type: str
    entity_type: str | None = None
    entity_id: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    created_at: datetime


# =============================================================================
# Profiles
# =============================================================================


class ProfileSkill(BaseModel):
    skill_id: uuid.UUID
    name: str
    experience_level: ExperienceLevel


class ProfileResponse(BaseModel):
    """Public view of a user; internal account fields are not exposed."""

    id: uuid.UUID
    username: str
    name: str | None = None
    bio: str | None = None
    wallet_address: str
    is_freelancer: bool
    member_since: datetime
    skills: list[ProfileSkill]
    active_services: int
    review_count: int
    average_score: float | None = None


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    message: str
