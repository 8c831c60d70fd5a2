"""Lambda Blue — entry point."""

import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from loguru import logger

from lambda_blue.config import Config
from lambda_blue.logger import setup_logger
from lambda_blue.i18n import init as i18n_init
from lambda_blue.core.launcher import Launcher
from lambda_blue.core.persistence import RegistryStore
from lambda_blue.ui.main_window import MainWindow


def main() -> None:
    # ---- 1. Config ----
    config = Config()

    # ---- 2. Logger ----
    setup_logger(config.log_dir, debug=config.debug)
    logger.info("Lambda Blue starting from {}", config.data_dir)

    # ---- 3. i18n ----
    i18n_init(config.language)
    logger.info("Language: {}", config.language)

    # ---- 4. Core services ----
    store = RegistryStore(config.registry_path, pretty=config.debug)
    launcher = Launcher(config.data_dir)

    # ---- 5. Qt Application ----
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough,
    )
    app = QApplication(sys.argv)

    # ---- 6. Main Window ----
    window = MainWindow(config, store, launcher)
    window.show()
    logger.info("Window shown, entering event loop")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
