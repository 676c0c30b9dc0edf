from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Sequence

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt, Signal

from admin_workstation.data import DirectoryUser
from admin_workstation.workstation import SelectionModel


@dataclass(slots=True)
class UserColumn:
    key: str
    header: str
    accessor: Callable[[DirectoryUser], str | None]
    alignment: Qt.AlignmentFlag = Qt.AlignmentFlag.AlignLeft


def _format_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d %H:%M")


SELECT_COLUMN = 0


class UserTableModel(QAbstractTableModel):
    """Directory grid whose first column mirrors the session selection."""

    users_loaded = Signal(int)

    def __init__(
        self,
        selection: SelectionModel,
        users: Sequence[DirectoryUser] | None = None,
    ) -> None:
        super().__init__()
        self._selection = selection
        self._columns: List[UserColumn] = [
            UserColumn("selected", "", lambda user: None, Qt.AlignmentFlag.AlignCenter),
            UserColumn("name", "Name", lambda user: user.name),
            UserColumn("email", "Email", lambda user: user.email),
            UserColumn("role", "Role", lambda user: user.role.value),
            UserColumn("status", "Status", lambda user: user.status.value),
            UserColumn("department", "Department", lambda user: user.department),
            UserColumn("created_at", "Created", lambda user: _format_datetime(user.created_at)),
        ]
        self._users: list[DirectoryUser] = list(users or [])
        self._unsubscribe = selection.changed.subscribe(self._on_selection_changed)

    # ----------------------------------------------------------------- Qt API

    def rowCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802
        if parent and parent.isValid():
            return 0
        return len(self._users)

    def columnCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802
        if parent and parent.isValid():
            return 0
        return len(self._columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # noqa: N802, ANN001
        if not index.isValid():
            return None
        row = index.row()
        if row < 0 or row >= len(self._users):
            return None

        user = self._users[row]
        column_meta = self._columns[index.column()]

        if index.column() == SELECT_COLUMN:
            if role == Qt.ItemDataRole.CheckStateRole:
                selected = self._selection.is_selected(user.id)
                return Qt.CheckState.Checked if selected else Qt.CheckState.Unchecked
            if role == Qt.ItemDataRole.UserRole:
                return user
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            value = column_meta.accessor(user)
            return "—" if value is None else str(value)
        if role == Qt.ItemDataRole.UserRole:
            return user
        if role == Qt.ItemDataRole.TextAlignmentRole:
            return int(column_meta.alignment)
        return None

    def setData(  # noqa: N802
        self,
        index: QModelIndex,
        value: object,
        role: int = Qt.ItemDataRole.EditRole,
    ) -> bool:
        if not index.isValid() or index.column() != SELECT_COLUMN:
            return False
        if role != Qt.ItemDataRole.CheckStateRole:
            return False
        user = self.user_at(index.row())
        if user is None:
            return False
        wanted = Qt.CheckState(value) == Qt.CheckState.Checked
        if wanted != self._selection.is_selected(user.id):
            self._selection.toggle(user.id)
        return True

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        base = super().flags(index)
        if index.isValid() and index.column() == SELECT_COLUMN:
            return base | Qt.ItemFlag.ItemIsUserCheckable
        return base

    def headerData(  # noqa: N802
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> object:
        if orientation != Qt.Orientation.Horizontal:
            return super().headerData(section, orientation, role)
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if section < 0 or section >= len(self._columns):
            return None
        return self._columns[section].header

    # ----------------------------------------------------------------- Helpers

    def set_users(self, users: Iterable[DirectoryUser]) -> None:
        self.beginResetModel()
        self._users = list(users)
        self.endResetModel()
        self.users_loaded.emit(len(self._users))

    def user_at(self, row: int) -> DirectoryUser | None:
        if 0 <= row < len(self._users):
            return self._users[row]
        return None

    def users(self) -> list[DirectoryUser]:
        return list(self._users)

    def visible_ids(self) -> list[str]:
        return [user.id for user in self._users]

    def column_index(self, key: str) -> int | None:
        for index, column in enumerate(self._columns):
            if column.key == key:
                return index
        return None

    def dispose(self) -> None:
        self._unsubscribe()

    def _on_selection_changed(self, _ids: frozenset[str]) -> None:
        if not self._users:
            return
        top = self.index(0, SELECT_COLUMN)
        bottom = self.index(len(self._users) - 1, SELECT_COLUMN)
        self.dataChanged.emit(top, bottom, [Qt.ItemDataRole.CheckStateRole])


__all__ = ["UserColumn", "UserTableModel"]
