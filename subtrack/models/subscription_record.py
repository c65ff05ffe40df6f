"""SubscriptionRecord model - one serialized subscription collection per user."""

from sqlalchemy import JSON, Column, DateTime, String, func

from subtrack.core.database import Base


class SubscriptionRecord(Base):
    """Key-value row holding a user's full subscription list as JSON."""

    __tablename__ = "subscription_records"

    user_id = Column(String(255), primary_key=True)
    records = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
