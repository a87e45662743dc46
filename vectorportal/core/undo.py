from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from vectorportal.core.command import Command


class UndoManager(QObject):
    """Runs store commands and keeps them for undo/redo."""

    stack_changed = Signal()

    def __init__(self):
        super().__init__()
        self.undo_stack: list[Command] = []
        self.redo_stack: list[Command] = []

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        self.stack_changed.emit()

    def push(self, command: Command):
        """Execute *command* and record it; any redo history is dropped."""
        command.execute()
        self.undo_stack.append(command)
        self.redo_stack.clear()
        self.stack_changed.emit()

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        command = self.undo_stack.pop()
        command.undo()
        self.redo_stack.append(command)
        self.stack_changed.emit()
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        command = self.redo_stack.pop()
        command.execute()
        self.undo_stack.append(command)
        self.stack_changed.emit()
        return True
