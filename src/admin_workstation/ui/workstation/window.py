from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QDockWidget,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QTableView,
)

from admin_workstation.data import QuickStats
from admin_workstation.utils.errors import ErrorDescriptor, ErrorSeverity
from admin_workstation.workstation import InsightsSummary, MainContentLayout, WorkstationSnapshot

from .bridge import WorkstationBridge
from .models import UserTableModel


class WorkstationWindow(QMainWindow):
    """Minimal shell hosting the directory grid and the insights dock."""

    def __init__(self, bridge: WorkstationBridge) -> None:
        super().__init__()
        self._bridge = bridge
        self.setWindowTitle("Admin Workstation")

        self._model = UserTableModel(bridge.controller.session.selection)
        self._table = QTableView(self)
        self._table.setModel(self._model)
        self.setCentralWidget(self._table)

        self._search = QLineEdit(self)
        self._search.setPlaceholderText("Search users")
        self._search.returnPressed.connect(self._apply_search)
        toolbar = self.addToolBar("Directory")
        toolbar.addWidget(self._search)
        refresh = QAction("Refresh", self)
        refresh.triggered.connect(self._reload)
        toolbar.addAction(refresh)

        self._insights_label = QLabel(self)
        self._insights_label.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._insights = QDockWidget("Insights", self)
        self._insights.setWidget(self._insights_label)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self._insights)

        bridge.snapshot_changed.connect(self._render_snapshot)
        bridge.error_raised.connect(self._show_error)
        bridge.bulk_action_settled.connect(lambda _applied: self._load_directory())

        self._render_snapshot(bridge.snapshot())
        self._reload()

    # ----------------------------------------------------------------- Slots

    def _apply_search(self) -> None:
        self._bridge.controller.session.filters.update(search=self._search.text())
        self._load_directory()

    def _load_directory(self) -> None:
        self._model.set_users(self._bridge.controller.load_directory())

    def _reload(self) -> None:
        self._load_directory()
        self._bridge.refresh_quick_stats()

    def _render_snapshot(self, snapshot: WorkstationSnapshot) -> None:
        split = snapshot.layout.main_content_layout is MainContentLayout.SPLIT
        self._insights.setVisible(split and snapshot.layout.insights_panel_open)
        self._insights_label.setText(_insights_text(snapshot.quick_stats))
        self.statusBar().showMessage(
            f"{snapshot.selection_count} selected"
            + (" · loading stats…" if snapshot.stats_loading else ""),
        )

    def _show_error(self, descriptor: ErrorDescriptor) -> None:
        icon = (
            QMessageBox.Icon.Warning
            if descriptor.severity is ErrorSeverity.WARNING
            else QMessageBox.Icon.Critical
        )
        box = QMessageBox(icon, descriptor.headline, descriptor.detail, parent=self)
        if descriptor.suggestion:
            box.setInformativeText(descriptor.suggestion)
        box.open()

    def closeEvent(self, event) -> None:  # noqa: N802, ANN001
        self._model.dispose()
        self._bridge.dispose()
        super().closeEvent(event)


def _insights_text(stats: QuickStats) -> str:
    summary = InsightsSummary.from_stats(stats)
    lines = [
        f"Total users: {summary.total_users}",
        f"Active rate: {summary.active_rate}%",
        f"Pending: {summary.pending_count}",
        f"In progress: {stats.in_progress_workflows}",
        f"Due this week: {stats.due_this_week}",
    ]
    if summary.recommended_actions:
        lines.append("")
        lines.extend(f"• {action}" for action in summary.recommended_actions)
    return "\n".join(lines)


__all__ = ["WorkstationWindow"]
