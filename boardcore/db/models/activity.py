from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from .base import Base, now_utc


class UserActivityLogItem(Base):
    __tablename__ = 'user_activity_log'
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False)
    # Free-text category, e.g. 'Warning', 'Ban', 'Login'
    type = Column(String(50), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    detail = Column(Text, nullable=True)

    __table_args__ = (
        Index('ix_user_activity_log_username_timestamp', 'username', 'timestamp'),
    )
