from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QMainWindow, QTabWidget

from eq_trainer.audio import SoundDeviceOutput, ToneEngine
from eq_trainer.config import AppConfig
from eq_trainer.recipes import Recipe
from .lab_tab import FrequencyLabTab
from .recipes_tab import RecipesTab
from .trainer_tab import EarTrainerTab

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, engine: ToneEngine, recipes: list[Recipe], config: AppConfig) -> None:
        super().__init__()
        self.setWindowTitle("EQ Trainer")
        self.resize(1000, 650)

        self.engine = engine
        self._tabs = QTabWidget()
        self._lab_tab = FrequencyLabTab(engine)
        self._tabs.addTab(self._lab_tab, "Frequency Lab")
        self._trainer_tab = EarTrainerTab(engine)
        self._tabs.addTab(self._trainer_tab, "Ear Trainer")
        self._recipes_tab = RecipesTab(recipes, sample_count=config.curve_points)
        self._tabs.addTab(self._recipes_tab, "EQ Recipes")
        self.setCentralWidget(self._tabs)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.engine.shutdown()
        super().closeEvent(event)


def launch_gui(config: AppConfig, recipes: list[Recipe]) -> MainWindow:
    app = QApplication.instance()
    owns_app = False
    if app is None:
        app = QApplication(sys.argv)
        owns_app = True

    output = SoundDeviceOutput(sample_rate=config.sample_rate, blocksize=config.blocksize, device=config.device)
    engine = ToneEngine(
        output,
        level=config.tone_level,
        attack_seconds=config.attack_seconds,
        release_seconds=config.release_seconds,
    )

    def release_audio() -> None:
        engine.shutdown()
        output.teardown()
        logger.debug("GUI closed, audio output released")

    window = MainWindow(engine, recipes, config)
    window.show()
    if not owns_app:
        app.aboutToQuit.connect(release_audio)
        return window
    try:
        app.exec()
    finally:
        release_audio()
    return window
