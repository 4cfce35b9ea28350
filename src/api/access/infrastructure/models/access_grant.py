"""SQLAlchemy ORM model for the access_grants table."""

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AccessGrantModel(Base, TimestampMixin):
    """ORM model for access_grants table.

    Constraints:
    - (grantor_user_id, grantee_user_id) is unique
    - grantor and grantee differ
    - both users cascade on delete
    """

    __tablename__ = "access_grants"
    __table_args__ = (
        UniqueConstraint(
            "grantor_user_id",
            "grantee_user_id",
            name="uq_access_grants_grantor_grantee",
        ),
        CheckConstraint(
            "grantor_user_id <> grantee_user_id",
            name="ck_access_grants_not_self",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    grantor_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    grantee_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<AccessGrantModel(id={self.id}, grantor={self.grantor_user_id}, "
            f"grantee={self.grantee_user_id})>"
        )
