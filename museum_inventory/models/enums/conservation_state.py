import enum


class ConservationState(str, enum.Enum):
    """Condition grade of a physical item.

    Declaration order is the order in which batch quantities are expanded
    into positions: all Good units first, then Regular, then Bad.
    """

    good = "Good"
    regular = "Regular"
    bad = "Bad"
