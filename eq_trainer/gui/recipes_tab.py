from __future__ import annotations

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from eq_trainer.plotting import draw_curve, reference_for_curve
from eq_trainer.recipes import Recipe, RecipeStep
from eq_trainer.response import DEFAULT_SAMPLE_COUNT, PlotGeometry, render_curve


def format_steps(steps: tuple[RecipeStep, ...]) -> str:
    lines = []
    for step in steps:
        marker = "+" if step.kind == "boost" else "-"
        line = f"[{marker}] {step.frequency}  {step.action}"
        if step.reason:
            line += f": {step.reason}"
        lines.append(line)
    return "\n".join(lines)


class RecipesTab(QWidget):
    def __init__(
        self,
        recipes: list[Recipe],
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.recipes = list(recipes)
        self.sample_count = sample_count
        self.plot_geometry = PlotGeometry()

        layout = QVBoxLayout(self)
        splitter = QSplitter(Qt.Horizontal)
        layout.addWidget(splitter)

        self.recipe_list = QListWidget()
        for index, recipe in enumerate(self.recipes):
            item = QListWidgetItem(recipe.name)
            item.setData(Qt.UserRole, index)
            item.setToolTip(recipe.category)
            self.recipe_list.addItem(item)
        splitter.addWidget(self.recipe_list)

        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)
        right_layout.setContentsMargins(4, 0, 0, 0)
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        right_layout.addWidget(self.title_label)
        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        right_layout.addWidget(self.description_label)
        self.steps_label = QLabel()
        self.steps_label.setWordWrap(True)
        self.steps_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        right_layout.addWidget(self.steps_label)
        self.compare_box = QCheckBox("Overlay series biquad response")
        right_layout.addWidget(self.compare_box)

        self.figure = Figure(figsize=(6, 2.4))
        self.axes = self.figure.add_subplot(111)
        self.canvas = FigureCanvas(self.figure)
        self.canvas.setMinimumHeight(220)
        right_layout.addWidget(self.canvas, stretch=1)
        splitter.addWidget(right_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)

        self.recipe_list.currentRowChanged.connect(lambda _: self._update_plot())
        self.compare_box.toggled.connect(lambda _: self._update_plot())
        if self.recipes:
            self.recipe_list.setCurrentRow(0)

    def _current_recipe(self) -> Recipe | None:
        row = self.recipe_list.currentRow()
        if 0 <= row < len(self.recipes):
            return self.recipes[row]
        return None

    def _update_plot(self) -> None:
        recipe = self._current_recipe()
        if recipe is None:
            self.axes.clear()
            self.axes.text(0.5, 0.5, "Select a recipe to preview", ha="center", va="center", transform=self.axes.transAxes)
            self.canvas.draw_idle()
            return
        self.title_label.setText(f"{recipe.name}  ({recipe.category})")
        self.description_label.setText(recipe.description)
        self.steps_label.setText(format_steps(recipe.steps))
        try:
            curve = render_curve(recipe.filter_set, self.sample_count, self.plot_geometry)
            reference = None
            if self.compare_box.isChecked():
                reference = reference_for_curve(recipe.filter_set, curve, self.plot_geometry)
            draw_curve(self.axes, curve, self.plot_geometry, reference_db=reference)
        except Exception as exc:
            self.axes.clear()
            self.axes.text(0.5, 0.5, f"Plot error\n{exc}", ha="center", va="center", transform=self.axes.transAxes)
        self.figure.tight_layout()
        self.canvas.draw_idle()
