"""Module: species."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vetcare.db.base import Base


# Reference data shared by pets and professionals; never owned by either.
class Species(Base):
    __tablename__ = "species"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
