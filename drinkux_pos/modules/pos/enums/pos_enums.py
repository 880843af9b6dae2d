from enum import Enum


class POSVendor(str, Enum):
    SQUARE = "square"
    TOAST = "toast"
    CLOVER = "clover"


class ModifierSelectionType(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


class POSLocationStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
