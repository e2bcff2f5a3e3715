# museum_inventory/services/inventory/inventory_export_service.py

from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from museum_inventory.models.inventory.inventory_item_models import InventoryItem
from museum_inventory.models.inventory.location_models import Location
from museum_inventory.models.masters.item_template_models import ItemTemplate
from museum_inventory.schemas.inventory.inventory_export_schemas import (
    EXPORT_COLUMNS,
    MISSING_REFERENCE,
    InventoryExportRow,
)
from museum_inventory.utils.logger import get_logger

logger = get_logger(__name__)

EXPORT_FILENAME = "InventoryReport.xlsx"
EXPORT_SHEET_NAME = "Inventory"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

MAX_COLUMN_WIDTH = 60


def build_export_row(
    item: InventoryItem,
    template: Optional[ItemTemplate],
    location: Optional[Location],
) -> InventoryExportRow:
    # Dangling or absent references render as placeholders
    return InventoryExportRow(
        position=item.position,
        asset_code=template.asset_code if template else MISSING_REFERENCE,
        item_name=template.name if template else MISSING_REFERENCE,
        brand=(template.brand if template else None) or "",
        model=(template.model if template else None) or "",
        location=location.name if location else MISSING_REFERENCE,
        serial=item.serial or "",
        situation=item.situation or "",
        conservation_state=item.conservation_state.value,
        observations=item.observations or "",
    )


async def list_export_rows(db: AsyncSession) -> list[InventoryExportRow]:
    result = await db.execute(
        select(InventoryItem, ItemTemplate, Location)
        .outerjoin(ItemTemplate, ItemTemplate.id == InventoryItem.template_id)
        .outerjoin(Location, Location.id == InventoryItem.location_id)
        .order_by(InventoryItem.position)
    )
    return [build_export_row(item, template, location) for item, template, location in result.all()]


def render_inventory_workbook(rows: list[InventoryExportRow]) -> BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = EXPORT_SHEET_NAME

    headers = list(EXPORT_COLUMNS.values())
    ws.append(headers)

    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for row in rows:
        ws.append(row.as_cells())

    for idx, header in enumerate(headers, start=1):
        values = [len(str(header))] + [
            len(str(ws.cell(row=r, column=idx).value or ""))
            for r in range(2, ws.max_row + 1)
        ]
        ws.column_dimensions[get_column_letter(idx)].width = min(max(values) + 2, MAX_COLUMN_WIDTH)

    ws.freeze_panes = "A2"

    excel_file = BytesIO()
    wb.save(excel_file)
    excel_file.seek(0)
    return excel_file


async def export_inventory_workbook(db: AsyncSession) -> BytesIO:
    rows = await list_export_rows(db)
    logger.info("Inventory export generated", extra={"rows": len(rows)})
    return render_inventory_workbook(rows)
