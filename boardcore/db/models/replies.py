from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Index
from sqlalchemy.orm import validates
from .base import Base, now_utc


class Reply(Base):
    __tablename__ = 'replies'
    id = Column(Integer, primary_key=True, autoincrement=True)
    topic_id = Column(Integer, nullable=False)
    username = Column(String(50), nullable=False)
    body = Column(Text, nullable=False, default='')
    posted_date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    mods_only = Column(Boolean, nullable=False, default=False)
    edited_by = Column(String(50), nullable=True)
    last_edit = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('ix_replies_topic_id_posted_date', 'topic_id', 'posted_date'),
    )

    @validates('topic_id')
    def _validate_topic_id(self, key, value):
        # A reply never moves to another topic once assigned.
        if self.topic_id is not None and value != self.topic_id:
            raise ValueError(f"Reply {self.id} already belongs to topic {self.topic_id}")
        return value
