from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from eq_trainer.audio import ToneEngine
from eq_trainer.recipes import frequency_tip
from eq_trainer.response import MAX_FREQUENCY_HZ, MIN_FREQUENCY_HZ

_STEP_HZ = 10
_START_HZ = 400


class FrequencyLabTab(QWidget):
    """Sweep a sine tone across the spectrum with a slider."""

    def __init__(self, engine: ToneEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.engine = engine
        self._build_ui()
        self._wire_events()
        self._set_frequency(_START_HZ)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        self.frequency_label = QLabel()
        self.frequency_label.setAlignment(Qt.AlignCenter)
        self.frequency_label.setStyleSheet("font-size: 48px; font-weight: bold;")
        layout.addWidget(self.frequency_label)
        self.tip_title_label = QLabel()
        self.tip_title_label.setAlignment(Qt.AlignCenter)
        self.tip_title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self.tip_title_label)
        self.tip_label = QLabel()
        self.tip_label.setAlignment(Qt.AlignCenter)
        self.tip_label.setWordWrap(True)
        layout.addWidget(self.tip_label)

        slider_row = QHBoxLayout()
        self.down_button = QPushButton(f"-{_STEP_HZ}")
        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(int(MIN_FREQUENCY_HZ), int(MAX_FREQUENCY_HZ))
        self.slider.setSingleStep(_STEP_HZ)
        self.slider.setPageStep(_STEP_HZ * 10)
        self.up_button = QPushButton(f"+{_STEP_HZ}")
        slider_row.addWidget(self.down_button)
        slider_row.addWidget(self.slider, stretch=1)
        slider_row.addWidget(self.up_button)
        layout.addLayout(slider_row)

        self.play_button = QPushButton()
        self.play_button.setCheckable(True)
        layout.addWidget(self.play_button, alignment=Qt.AlignCenter)
        layout.addStretch()
        self._sync_play_button()

    def _wire_events(self) -> None:
        self.slider.valueChanged.connect(self._on_slider_changed)
        self.down_button.clicked.connect(lambda: self._set_frequency(self.slider.value() - _STEP_HZ))
        self.up_button.clicked.connect(lambda: self._set_frequency(self.slider.value() + _STEP_HZ))
        self.play_button.clicked.connect(self._toggle)

    # ------------------------------------------------------------------
    def _set_frequency(self, value: int) -> None:
        value = max(int(MIN_FREQUENCY_HZ), min(int(MAX_FREQUENCY_HZ), int(value)))
        if self.slider.value() == value:
            self._on_slider_changed(value)
        else:
            self.slider.setValue(value)

    def _on_slider_changed(self, value: int) -> None:
        self.frequency_label.setText(f"{value} Hz")
        tip = frequency_tip(value)
        self.tip_title_label.setText(tip.title)
        self.tip_label.setText(tip.description)
        if self.engine.is_playing:
            self.engine.play(float(value))

    def _toggle(self) -> None:
        self.engine.toggle(float(self.slider.value()))
        self._sync_play_button()

    def _sync_play_button(self) -> None:
        playing = self.engine.is_playing
        self.play_button.setChecked(playing)
        self.play_button.setText("Stop" if playing else "Play")

    def hideEvent(self, event) -> None:  # noqa: N802 - Qt override
        self.engine.stop()
        self._sync_play_button()
        super().hideEvent(event)
