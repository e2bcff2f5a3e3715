# museum_inventory/utils/formatting.py


def blank_to_none(value):
    """Empty or whitespace-only strings are stored as NULL."""
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")
