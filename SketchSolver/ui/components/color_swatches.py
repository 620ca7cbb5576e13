from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import QSize, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QToolButton, QWidget

# Stroke colors offered in the toolbar (white first: default ink on black)
SWATCHES = [
    "#ffffff",
    "#ee3333",
    "#e64980",
    "#be4bdb",
    "#893200",
    "#228be6",
    "#3333ee",
    "#40c057",
    "#00aa00",
    "#fab005",
    "#fd7e14",
]


class ColorSwatchBar(QWidget):
    """Row of clickable color swatches; emits `colorSelected(str)`."""
    colorSelected = pyqtSignal(str)

    def __init__(self, swatches: Optional[list[str]] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 0, 4, 0)
        layout.setSpacing(4)
        self._buttons: list[QToolButton] = []
        for color in (swatches or SWATCHES):
            btn = QToolButton(self)
            btn.setFixedSize(QSize(22, 22))
            btn.setToolTip(color)
            btn.setStyleSheet(f"background-color: {color}; border: 1px solid #555; border-radius: 11px;")
            btn.clicked.connect(lambda _checked=False, c=color: self.colorSelected.emit(c))
            layout.addWidget(btn)
            self._buttons.append(btn)

    def buttons(self) -> list[QToolButton]:
        return list(self._buttons)
