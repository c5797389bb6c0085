from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leave_management.core.database import Base


class LeaveType(Base):
    __tablename__ = "leave_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False
    )  # e.g. Casual Leave, Sick Leave
    max_days_per_year: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    balances = relationship("LeaveBalance", back_populates="leave_type")
