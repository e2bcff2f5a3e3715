from sqlalchemy import Column, String, UniqueConstraint
from museum_inventory.core.db import Base
from museum_inventory.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Location(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "locations"

    name = Column(String(100), nullable=False)

    # Constraint name is matched when remapping IntegrityError
    __table_args__ = (UniqueConstraint("name", name="uq_locations_name"),)

    def __repr__(self):
        return f"<Location id={self.id} name={self.name}>"
