"""Key-value preference model (values are JSON-serialized strings)."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Preference(Base):
    """Preference table: key, value."""

    __tablename__ = "preference"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
