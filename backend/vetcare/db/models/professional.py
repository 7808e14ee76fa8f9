"""Module: professional."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vetcare.db.base import Base, utc_now

professional_species = Table(
    "professional_species",
    Base.metadata,
    Column(
        "professional_id",
        Integer,
        ForeignKey("professionals.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "species_id",
        Integer,
        ForeignKey("species.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# Veterinary professional. Owns its schedule entries; references species.
class Professional(Base):
    __tablename__ = "professionals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    license_number: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    surname: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=True)
    phone: Mapped[str] = mapped_column(String, nullable=True)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)

    # Mean of all ratings, NULL until the first one arrives.
    rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)

    schedule: Mapped[list["ScheduleEntry"]] = relationship(
        back_populates="professional",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScheduleEntry.id",
    )
    species: Mapped[list["Species"]] = relationship(
        secondary=professional_species,
        order_by="Species.id",
    )
