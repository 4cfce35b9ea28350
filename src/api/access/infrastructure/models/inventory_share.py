"""SQLAlchemy ORM model for the inventory_shares table."""

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class InventoryShareModel(Base, TimestampMixin):
    """ORM model for inventory_shares table.

    Constraints:
    - (inventory_id, shared_with_user_id) is unique
    - permission_level is one of the canonical tier names
    - the inventory and both users cascade on delete
    """

    __tablename__ = "inventory_shares"
    __table_args__ = (
        UniqueConstraint(
            "inventory_id",
            "shared_with_user_id",
            name="uq_inventory_shares_inventory_recipient",
        ),
        CheckConstraint(
            "permission_level IN ('view', 'edit_items', 'edit_inventory')",
            name="ck_inventory_shares_permission_level",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    inventory_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("inventories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shared_with_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shared_by_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    permission_level: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<InventoryShareModel(id={self.id}, inventory_id={self.inventory_id}, "
            f"shared_with={self.shared_with_user_id}, level={self.permission_level})>"
        )
