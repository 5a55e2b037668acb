from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Table, func
from sqlalchemy.orm import relationship
from .base import Base, now_utc


user_roles = Table(
    'user_roles',
    Base.metadata,
    Column('user_id', Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    Column('role_id', Integer, ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
)


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Stored casing is preserved; uniqueness is case-insensitive (uq_users_username_lower).
    username = Column(String(50), nullable=False, unique=True)
    password = Column(String, nullable=True)
    join_date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    last_login = Column(DateTime(timezone=True), nullable=True)

    roles = relationship("Role", secondary=user_roles, back_populates="users")
    # Presence of a ban row means the user is currently banned; it goes with the user.
    ban = relationship("Ban", uselist=False, back_populates="user", cascade="all")

    __table_args__ = (
        Index('ix_users_last_login', 'last_login'),
        Index('ix_users_join_date', 'join_date'),
    )


Index('uq_users_username_lower', func.lower(User.username), unique=True)


class Role(Base):
    __tablename__ = 'roles'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)

    users = relationship("User", secondary=user_roles, back_populates="roles")


class Ban(Base):
    __tablename__ = 'bans'
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), ForeignKey('users.username'), nullable=False, unique=True)
    reason = Column(Text, nullable=True)
    creator = Column(String(50), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    end_date = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="ban")


class Ignore(Base):
    __tablename__ = 'ignores'
    id = Column(Integer, primary_key=True, autoincrement=True)
    initiating_user = Column(String(50), nullable=False)
    ignored_user = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    # One record per ordered pair is expected but not enforced here.
    __table_args__ = (
        Index('ix_ignores_initiating_user', 'initiating_user'),
    )
