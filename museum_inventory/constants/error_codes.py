# museum_inventory/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---- generic ----
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

    # ---- item templates ----
    ITEM_TEMPLATE_NOT_FOUND = "ITEM_TEMPLATE_NOT_FOUND"

    # ---- locations ----
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_NAME_EXISTS = "LOCATION_NAME_EXISTS"

    # ---- inventory items ----
    INVENTORY_ITEM_NOT_FOUND = "INVENTORY_ITEM_NOT_FOUND"
    DUPLICATE_POSITION = "DUPLICATE_POSITION"
    BATCH_CREATE_FAILED = "BATCH_CREATE_FAILED"
