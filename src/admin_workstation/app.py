from __future__ import annotations

import asyncio
import sys

from PySide6.QtWidgets import QApplication
from qasync import QEventLoop

from admin_workstation.auth import Actor
from admin_workstation.bootstrap import build_services, build_workstation
from admin_workstation.config import SettingsManager
from admin_workstation.ui.workstation import WorkstationBridge, WorkstationWindow
from admin_workstation.utils import LoggingOptions, configure_logging, get_logger
from admin_workstation.utils.asyncio import AsyncBridge


def main() -> None:
    settings = SettingsManager().load()
    configure_logging(LoggingOptions(level=settings.log_level, tenant_id=settings.tenant_id))
    logger = get_logger(__name__)
    logger.info("Starting admin workstation", tenant_id=settings.tenant_id)

    app = QApplication(sys.argv)
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    bundle = build_services(settings)
    actor = (
        Actor(user_id=settings.user_id, tenant_id=settings.tenant_id)
        if settings.user_id
        else None
    )
    controller = build_workstation(bundle.registry, actor)
    bridge = WorkstationBridge(controller, async_bridge=AsyncBridge(loop))
    window = WorkstationWindow(bridge)
    window.show()

    app.aboutToQuit.connect(loop.stop)

    try:
        with loop:
            loop.run_forever()
            loop.run_until_complete(bundle.aclose())
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


__all__ = ["main"]
