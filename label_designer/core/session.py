# label_designer/core/session.py
"""
Editing session: the one current document plus its undo history.

The host UI keeps a single LabelSession, calls ``apply`` with any pure
transition from ``document`` (or ``templates.apply_template``), and
re-renders from ``session.document`` whenever a listener fires.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from PySide6 import QtGui

from .commands import MoveElementCmd, ReplaceDocumentCmd
from .document import apply_move, new_document
from .models import LabelDocument

logger = logging.getLogger(__name__)

Listener = Callable[[LabelDocument], None]


class LabelSession:
    def __init__(self, document: Optional[LabelDocument] = None, undo_limit: int = 100):
        self._document = document if document is not None else new_document()
        self._listeners: List[Listener] = []
        self.undo_stack = QtGui.QUndoStack()
        self.undo_stack.setUndoLimit(undo_limit)

    # ---- state ----

    @property
    def document(self) -> LabelDocument:
        return self._document

    @property
    def can_undo(self) -> bool:
        return self.undo_stack.canUndo()

    @property
    def can_redo(self) -> bool:
        return self.undo_stack.canRedo()

    @property
    def is_modified(self) -> bool:
        return not self.undo_stack.isClean()

    def mark_saved(self) -> None:
        self.undo_stack.setClean()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set_document(self, document: LabelDocument) -> None:
        self._document = document
        for listener in list(self._listeners):
            listener(document)

    # ---- edits ----

    def apply(
        self,
        transition: Callable[..., LabelDocument],
        *args: Any,
        text: str = "Edit label",
        **kwargs: Any,
    ) -> LabelDocument:
        """
        Run ``transition(document, *args, **kwargs)`` and record it.

        A transition that returns an equal document is not recorded.
        """
        new = transition(self._document, *args, **kwargs)
        return self.replace(new, text=text)

    def replace(self, document: LabelDocument, text: str = "Replace document") -> LabelDocument:
        if document == self._document:
            return self._document
        logger.debug("session: %s", text)
        self.undo_stack.push(ReplaceDocumentCmd(self, self._document, document, text))
        return self._document

    def move(self, element_id: str, dx: float, dy: float) -> LabelDocument:
        """One completed move gesture; repeated moves of one element merge."""
        new = apply_move(self._document, element_id, dx, dy)
        if new == self._document:
            return self._document
        self.undo_stack.push(MoveElementCmd(self, element_id, self._document, new))
        return self._document

    def undo(self) -> LabelDocument:
        self.undo_stack.undo()
        return self._document

    def redo(self) -> LabelDocument:
        self.undo_stack.redo()
        return self._document

    def reset(self, document: LabelDocument) -> None:
        """Start over with *document* (e.g. after load); history is dropped."""
        self.undo_stack.clear()
        self._set_document(document)
        self.undo_stack.setClean()
