"""Qt adapters for the admin workstation."""

from .bridge import WorkstationBridge
from .models import UserColumn, UserTableModel
from .window import WorkstationWindow

__all__ = ["UserColumn", "UserTableModel", "WorkstationBridge", "WorkstationWindow"]
