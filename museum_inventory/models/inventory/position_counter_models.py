from sqlalchemy import Column, Integer, CheckConstraint
from museum_inventory.core.db import Base
from museum_inventory.models.base.mixins import TimestampMixin

POSITION_COUNTER_ID = 1


class PositionCounter(Base, TimestampMixin):
    """High-water mark of every inventory position ever allocated.

    Single row. Batch inserts lock it to serialize allocation, and because
    it only moves forward a deleted item's position is never handed out again.
    """

    __tablename__ = "inventory_position_counter"

    id = Column(Integer, primary_key=True, autoincrement=False)
    last_position = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("id = 1", name="ck_position_counter_single_row"),
        CheckConstraint("last_position >= 0", name="ck_position_counter_non_negative"),
    )

    def __repr__(self):
        return f"<PositionCounter last_position={self.last_position}>"
