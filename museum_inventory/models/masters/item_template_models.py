from sqlalchemy import Column, String, Index
from museum_inventory.core.db import Base
from museum_inventory.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ItemTemplate(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Reusable description of a kind of asset. Not itself a physical item."""

    __tablename__ = "item_templates"

    asset_code = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    type = Column(String(255), nullable=True)
    color = Column(String(100), nullable=True)
    dimensions = Column(String(255), nullable=True)
    other = Column(String(500), nullable=True)
    origin = Column(String(255), nullable=True)

    __table_args__ = (Index("ix_item_template_name", "name"),)

    def __repr__(self):
        return f"<ItemTemplate id={self.id} asset_code={self.asset_code} name={self.name}>"
