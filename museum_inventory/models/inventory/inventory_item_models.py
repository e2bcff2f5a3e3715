from sqlalchemy import Column, Integer, String, Text, Enum, CheckConstraint, UniqueConstraint, Index
from museum_inventory.core.db import Base
from museum_inventory.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin
from museum_inventory.models.enums.conservation_state import ConservationState


class InventoryItem(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One physical unit. Created only through batch inserts.

    template_id and location_id are plain references: the store does not
    enforce them, so deleting a template or location leaves them dangling.
    """

    __tablename__ = "inventory_items"

    position = Column(Integer, nullable=False)
    template_id = Column(String(36), nullable=False, index=True)
    location_id = Column(String(36), nullable=True, index=True)
    serial = Column(String(255), nullable=True)
    situation = Column(Text, nullable=True)
    conservation_state = Column(
        Enum(ConservationState, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    observations = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("position", name="uq_inventory_items_position"),
        CheckConstraint("position > 0", name="ck_inventory_items_position_positive"),
        Index("ix_inventory_items_template_location", "template_id", "location_id"),
    )

    def __repr__(self):
        return f"<InventoryItem id={self.id} position={self.position} state={self.conservation_state}>"
