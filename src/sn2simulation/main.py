"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging from the environment.
2. Creates the Qt Application and sets the pyqtgraph defaults.
3. Instantiates the Playback Controller and passes it into the Main Window.
"""
import logging
import os
import sys

import pyqtgraph as pg
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from sn2simulation.config import APP_ID, ORG_ID, VISIBLE_APP_NAME, get_log_file, get_log_level
from sn2simulation.controller.playback import PlaybackController
from sn2simulation.logging_config import setup_logging
from sn2simulation.view.main_window import MainWindow

logger = logging.getLogger(__name__)

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app


def main() -> int:
    """Main entry point for the application."""
    # 1. Setup Logging (SN2SIM_LOG_LEVEL=DEBUG to see every tick)
    setup_logging(level=get_log_level(), log_file=get_log_file())

    # 2. Create the Qt Application
    app = create_app()

    # 3. Controller & Main Window
    controller = PlaybackController()
    window = MainWindow(controller)
    window.show()
    logger.info("Main window shown.")

    # 4. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
