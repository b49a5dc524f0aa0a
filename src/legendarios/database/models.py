"""SQLAlchemy models for legendarios database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Member(Base):
    """Legendário model."""

    __tablename__ = "members"

    id = Column(String, primary_key=True)
    legendary_number = Column(String, nullable=False, index=True)
    full_name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active_paying")
    inactive_reason = Column(String, nullable=True)

    top_number = Column(String, nullable=True)
    track_name = Column(String, nullable=True)
    conquest_date = Column(Date, nullable=True)

    birth_date = Column(Date, nullable=True)
    profession = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    neighborhood = Column(String, nullable=True)
    city = Column(String, nullable=False, default="")
    state = Column(String, nullable=True)
    phone = Column(String, nullable=False, default="")
    email = Column(String, nullable=True)

    spouse_name = Column(String, nullable=True)
    spouse_phone = Column(String, nullable=True)

    church_name = Column(String, nullable=True)
    pastor_name = Column(String, nullable=True)
    pastor_phone = Column(String, nullable=True)
    is_community_active = Column(Boolean, default=False, nullable=False)

    socio_economic_notes = Column(String, nullable=True)
    joined_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    children = relationship(
        "MemberChild",
        back_populates="member",
        cascade="all, delete-orphan",
        order_by="MemberChild.position",
    )
    assistance_records = relationship(
        "AssistanceRecord",
        back_populates="member",
        cascade="all, delete-orphan",
        order_by="AssistanceRecord.position",
    )


class MemberChild(Base):
    """Child of a member, kept in entry order."""

    __tablename__ = "member_children"

    id = Column(Integer, primary_key=True)
    member_id = Column(String, ForeignKey("members.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    age = Column(String, nullable=False, default="")

    member = relationship("Member", back_populates="children")


class AssistanceRecord(Base):
    """Assistance given to a member."""

    __tablename__ = "assistance_records"

    id = Column(Integer, primary_key=True)
    record_id = Column(String, nullable=False)
    member_id = Column(String, ForeignKey("members.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    description = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    member = relationship("Member", back_populates="assistance_records")


class DuesPayment(Base):
    """Monthly dues payment model.

    member_id is deliberately not a foreign key: payments outlive the
    member they were recorded for.
    """

    __tablename__ = "dues_payments"

    id = Column(String, primary_key=True)
    member_id = Column(String, nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    paid_date = Column(Date, nullable=False)


class Transaction(Base):
    """Manual cash-book transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False, default="Geral")
    date = Column(Date, nullable=False)
    member_id = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
