"""SQLAlchemy ORM models for the inventories and items tables."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class InventoryModel(Base, TimestampMixin):
    """ORM model for inventories table.

    Foreign Key Constraint:
    - user_id references users.id with RESTRICT delete
    - A user's inventories must be transferred or deleted before the user
    """

    __tablename__ = "inventories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<InventoryModel(id={self.id}, user_id={self.user_id})>"


class ItemModel(Base, TimestampMixin):
    """ORM model for items table.

    Items belong to their inventory, not to a user, so an ownership transfer
    moves them without touching this table.
    """

    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    inventory_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("inventories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ItemModel(id={self.id}, inventory_id={self.inventory_id})>"
