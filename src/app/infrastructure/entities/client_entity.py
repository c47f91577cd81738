from datetime import date, datetime
from uuid import UUID, uuid4
from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.database.database import Base, UTCDateTime


class ClientEntity(Base):
    """SQLAlchemy model for Client table."""
    __tablename__ = "clients"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(String(100), index=True)
    last_name: Mapped[str] = mapped_column(String(100), index=True)
    company_name: Mapped[str] = mapped_column(String(150), index=True)
    # Unique constraints are the backstop for the registry's advisory checks
    tax_id: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    birth_date: Mapped[date] = mapped_column(Date)
    phone_number: Mapped[str] = mapped_column(String(30))
    email: Mapped[str] = mapped_column(String(150), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
