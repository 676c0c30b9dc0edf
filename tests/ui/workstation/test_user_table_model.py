from __future__ import annotations

from PySide6.QtCore import Qt

from admin_workstation.ui.workstation import UserTableModel
from admin_workstation.workstation import SelectionModel

from tests.factories import make_user


def test_model_projects_users(qt_app) -> None:
    model = UserTableModel(SelectionModel(), [make_user("u1", name="Alice", department=None)])

    assert model.rowCount() == 1
    name_column = model.column_index("name")
    department_column = model.column_index("department")
    assert model.data(model.index(0, name_column)) == "Alice"
    assert model.data(model.index(0, department_column)) == "—"
    assert model.headerData(name_column, Qt.Orientation.Horizontal) == "Name"


def test_check_column_mirrors_selection(qt_app) -> None:
    selection = SelectionModel()
    model = UserTableModel(selection, [make_user("u1"), make_user("u2")])
    changed: list[int] = []
    model.dataChanged.connect(lambda top, bottom, roles: changed.append(bottom.row()))
    check = Qt.ItemDataRole.CheckStateRole

    assert model.setData(model.index(1, 0), Qt.CheckState.Checked, check) is True
    assert selection.ids == frozenset({"u2"})
    assert model.data(model.index(1, 0), check) == Qt.CheckState.Checked
    assert model.data(model.index(0, 0), check) == Qt.CheckState.Unchecked

    selection.clear()

    assert model.data(model.index(1, 0), check) == Qt.CheckState.Unchecked
    assert changed == [1, 1]
    assert model.flags(model.index(0, 0)) & Qt.ItemFlag.ItemIsUserCheckable
    model.dispose()


def test_set_users_resets_rows(qt_app) -> None:
    model = UserTableModel(SelectionModel())
    loaded: list[int] = []
    model.users_loaded.connect(loaded.append)

    model.set_users([make_user("u1"), make_user("u2")])

    assert model.rowCount() == 2
    assert model.visible_ids() == ["u1", "u2"]
    assert loaded == [2]
