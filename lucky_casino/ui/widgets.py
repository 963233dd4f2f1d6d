"""Reusable Qt widgets for the casino UI."""
from __future__ import annotations

from PyQt6 import QtCore, QtWidgets


class CardLabel(QtWidgets.QLabel):
    """Simple label that renders a playing card or a slot symbol."""

    def __init__(self, text: str = "??", parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(text, parent)
        self.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self.setMinimumWidth(48)
        self.setStyleSheet("border: 1px solid #666; padding: 6px; background: #fff; font-weight: bold;")


class BetSelector(QtWidgets.QComboBox):
    """Drop-down of the configured bet denominations."""

    def __init__(self, amounts, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        for amount in amounts:
            self.addItem(f"{amount:,}", amount)

    def amount(self) -> int:
        return int(self.currentData())


__all__ = ["CardLabel", "BetSelector"]
