from __future__ import annotations

import random

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from eq_trainer.audio import ToneEngine
from eq_trainer.recipes import TRAINER_OPTIONS, TrainerOption

MAX_ROUNDS = 20


def grade_message(score: int, rounds: int) -> tuple[float, str]:
    grade = (score / rounds) * 10 if rounds else 0.0
    if grade >= 9:
        return grade, "Excellent! Perfect pitch?"
    if grade >= 7:
        return grade, "Very good, you have a great ear."
    if grade >= 5:
        return grade, "Average. Keep practising!"
    return grade, "Needs more training. Don't give up!"


class EarTrainerTab(QWidget):
    """Blind-guess quiz: a random option plays and the user names it."""

    def __init__(
        self,
        engine: ToneEngine,
        parent: QWidget | None = None,
        rng: random.Random | None = None,
        max_rounds: int = MAX_ROUNDS,
    ) -> None:
        super().__init__(parent)
        self.engine = engine
        self.rng = rng or random.Random()
        self.max_rounds = max_rounds
        self.round = 1
        self.score = 0
        self.target: TrainerOption | None = None
        self.answered = False
        self.option_buttons: dict[int, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        self.pages = QStackedWidget()
        layout.addWidget(self.pages)

        intro = QWidget()
        intro_layout = QVBoxLayout(intro)
        intro_label = QLabel(
            f"A pure sine tone will play. Pick the frequency you hear.\n"
            f"{self.max_rounds} rounds, graded from 0 to 10."
        )
        intro_label.setAlignment(Qt.AlignCenter)
        intro_layout.addWidget(intro_label)
        self.start_button = QPushButton("Start")
        self.start_button.clicked.connect(self.start_game)
        intro_layout.addWidget(self.start_button, alignment=Qt.AlignCenter)
        self.pages.addWidget(intro)

        game = QWidget()
        game_layout = QVBoxLayout(game)
        self.round_label = QLabel()
        game_layout.addWidget(self.round_label)
        self.feedback_label = QLabel()
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setStyleSheet("font-size: 20px;")
        game_layout.addWidget(self.feedback_label)
        self.replay_button = QPushButton()
        self.replay_button.clicked.connect(self.toggle_tone)
        game_layout.addWidget(self.replay_button, alignment=Qt.AlignCenter)
        grid = QGridLayout()
        for index, option in enumerate(TRAINER_OPTIONS):
            button = QPushButton(f"{option.frequency_hz} Hz\n{option.label}")
            button.setToolTip(option.description)
            button.setMinimumHeight(56)
            button.clicked.connect(lambda _=False, o=option: self.check_answer(o))
            self.option_buttons[option.frequency_hz] = button
            grid.addWidget(button, index // 4, index % 4)
        game_layout.addLayout(grid)
        self.next_button = QPushButton("Next")
        self.next_button.clicked.connect(self.next_round)
        game_layout.addWidget(self.next_button, alignment=Qt.AlignRight)
        self.pages.addWidget(game)

        result = QWidget()
        result_layout = QVBoxLayout(result)
        self.result_label = QLabel()
        self.result_label.setAlignment(Qt.AlignCenter)
        self.result_label.setStyleSheet("font-size: 24px;")
        result_layout.addWidget(self.result_label)
        restart_button = QPushButton("Try again")
        restart_button.clicked.connect(lambda: self.pages.setCurrentIndex(0))
        result_layout.addWidget(restart_button, alignment=Qt.AlignCenter)
        self.pages.addWidget(result)

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------
    def start_game(self) -> None:
        self.score = 0
        self.round = 1
        self.pages.setCurrentIndex(1)
        self._init_round()

    def next_round(self) -> None:
        if self.round >= self.max_rounds:
            self.engine.stop()
            grade, message = grade_message(self.score, self.max_rounds)
            self.result_label.setText(f"Grade: {grade:.1f}\n{message}")
            self.pages.setCurrentIndex(2)
            return
        self.round += 1
        self._init_round()

    def check_answer(self, selected: TrainerOption) -> None:
        if self.answered or self.target is None:
            return
        self.engine.stop()
        self.answered = True
        if selected.frequency_hz == self.target.frequency_hz:
            self.score += 1
            self.feedback_label.setText(f"Correct! {self.target.frequency_hz} Hz - {self.target.label}")
        else:
            self.feedback_label.setText(f"It was {self.target.frequency_hz} Hz - {self.target.label}")
        for hz, button in self.option_buttons.items():
            button.setEnabled(hz == self.target.frequency_hz)
        self._refresh_labels()

    def toggle_tone(self) -> None:
        if self.target is None:
            return
        self.engine.toggle(float(self.target.frequency_hz))
        self._refresh_labels()

    def _init_round(self) -> None:
        self.answered = False
        self.target = self.rng.choice(TRAINER_OPTIONS)
        self.feedback_label.setText("Listening... ??? Hz")
        for button in self.option_buttons.values():
            button.setEnabled(True)
        self.engine.play(float(self.target.frequency_hz))
        self._refresh_labels()

    def _refresh_labels(self) -> None:
        self.round_label.setText(f"Round {self.round}/{self.max_rounds}    Score {self.score}")
        self.replay_button.setText("Stop tone" if self.engine.is_playing else "Play again")
        self.next_button.setEnabled(self.answered)

    def hideEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.engine.stop()
        if self.pages.currentIndex() == 1:
            self._refresh_labels()
        super().hideEvent(event)
