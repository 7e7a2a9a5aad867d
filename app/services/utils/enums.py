# app/services/utils/enums.py

from enum import Enum


class NoShiftCode(Enum):
    """Зарезервированные коды активностей, при которых смена не создаётся."""
    CLOSED = "CLOSED"
    ADMIN = "ADMIN"
