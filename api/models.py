"""SQLAlchemy models for the Offer Hub marketplace."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from core.database import Base


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def _enum_column(enum_cls: type[PyEnum], name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=lambda x: [e.value for e in x],
    )


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class CreatedAtMixin:
    """For rows that are never updated after insert."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow)


def _uuid_pk() -> Mapped[uuid.UUID]:
    return mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


def _user_fk(ondelete: str = "CASCADE") -> Mapped[uuid.UUID]:
    return mapped_column(
        Uuid, ForeignKey("users.id", ondelete=ondelete), nullable=False, index=True
    )


class UserRole(str, PyEnum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class User(TimestampMixin, Base):
    """Marketplace account, identified by its wallet."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = _uuid_pk()
    wallet_address: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True
    )
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_freelancer: Mapped[bool] = mapped_column(Boolean, default=False)
    role: Mapped[UserRole] = mapped_column(
        _enum_column(UserRole, "user_role"), default=UserRole.USER
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    two_factor_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Service(TimestampMixin, Base):
    """A service offered by a freelancer."""

    __tablename__ = "services"
    __table_args__ = (
        Index("ix_services_freelancer_active", "freelancer_id", "is_active"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    freelancer_id: Mapped[uuid.UUID] = _user_fk()
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    delivery_time_days: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ServiceRequestStatus(str, PyEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ServiceRequest(TimestampMixin, Base):
    """A client asking a freelancer to take on one of their services.

    A client holds at most one pending request per service; the freelancer
    answers it once, accepting or rejecting.
    """

    __tablename__ = "service_requests"
    __table_args__ = (
        Index(
            "ix_service_requests_service_client_status",
            "service_id",
            "client_id",
            "status",
        ),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = _user_fk()
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ServiceRequestStatus] = mapped_column(
        _enum_column(ServiceRequestStatus, "service_request_status"),
        default=ServiceRequestStatus.PENDING,
    )


class Category(CreatedAtMixin, Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = _uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ServiceCategory(CreatedAtMixin, Base):
    """Pure join between services and categories."""

    __tablename__ = "service_categories"

    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )


class Skill(CreatedAtMixin, Base):
    __tablename__ = "skills"

    id: Mapped[uuid.UUID] = _uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)


class ExperienceLevel(str, PyEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


class FreelancerSkill(CreatedAtMixin, Base):
    """Skill claimed by a freelancer, keyed by (user_id, skill_id)."""

    __tablename__ = "freelancer_skills"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
    )
    experience_level: Mapped[ExperienceLevel] = mapped_column(
        _enum_column(ExperienceLevel, "experience_level"), nullable=False
    )


class Conversation(TimestampMixin, Base):
    """Message thread. Participants live in conversation_participants."""

    __tablename__ = "conversations"

    id: Mapped[uuid.UUID] = _uuid_pk()
    last_message_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ConversationParticipant(Base):
    __tablename__ = "conversation_participants"

    conversation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("conversations.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Message(CreatedAtMixin, Base):
    """A message in a conversation.

    Note: Immutable after creation except for the unread -> read transition.
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_conversation_created", "conversation_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    conversation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )
    sender_id: Mapped[uuid.UUID] = _user_fk()
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class TransactionStatus(str, PyEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TransactionType(str, PyEnum):
    PAYMENT = "payment"
    ESCROW_DEPOSIT = "escrow_deposit"
    ESCROW_RELEASE = "escrow_release"
    REFUND = "refund"


class Transaction(CreatedAtMixin, Base):
    """Money movement between two users.

    Users with transactions cannot be deleted (RESTRICT) so the ledger stays intact.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_status", "status"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    from_user_id: Mapped[uuid.UUID] = _user_fk(ondelete="RESTRICT")
    to_user_id: Mapped[uuid.UUID] = _user_fk(ondelete="RESTRICT")
    project_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    transaction_hash: Mapped[str | None] = mapped_column(
        String(128), nullable=True, unique=True
    )
    status: Mapped[TransactionStatus] = mapped_column(
        _enum_column(TransactionStatus, "transaction_status"),
        default=TransactionStatus.PENDING,
    )
    type: Mapped[TransactionType] = mapped_column(
        _enum_column(TransactionType, "transaction_type"), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Review(CreatedAtMixin, Base):
    """Rating left by one user for another."""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint(
            "from_user_id", "to_user_id", "project_id", name="uq_review_per_project"
        ),
        CheckConstraint("score BETWEEN 1 AND 5", name="ck_reviews_score_range"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    from_user_id: Mapped[uuid.UUID] = _user_fk()
    to_user_id: Mapped[uuid.UUID] = _user_fk()
    project_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)


class Achievement(CreatedAtMixin, Base):
    __tablename__ = "achievements"

    id: Mapped[uuid.UUID] = _uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    points: Mapped[int] = mapped_column(Integer, default=0)


class UserAchievement(Base):
    """Records which user earned which achievement, optionally minted as an NFT."""

    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    user_id: Mapped[uuid.UUID] = _user_fk()
    achievement_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False
    )
    nft_token_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    earned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ActivityLog(CreatedAtMixin, Base):
    """Audit trail entry.

    Note: Only has created_at since log entries are immutable.
    """

    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_user_action", "user_id", "action_type"),
    )

    id: Mapped[uuid.UUID] = _uuid_pk()
    user_id: Mapped[uuid.UUID] = _user_fk()
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    entity_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
