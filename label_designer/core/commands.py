from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6 import QtGui

from .models import LabelDocument

if TYPE_CHECKING:
    from .session import LabelSession


class ReplaceDocumentCmd(QtGui.QUndoCommand):
    """
    Swap the session document for a new snapshot.

    Documents are immutable, so undo/redo only has to remember the two
    values on either side of the edit.
    """

    def __init__(
        self,
        session: LabelSession,
        old_document: LabelDocument,
        new_document: LabelDocument,
        text: str = "Edit label",
    ):
        super().__init__(text)
        self.session = session
        self.old_document = old_document
        self.new_document = new_document

    def redo(self) -> None:
        self.session._set_document(self.new_document)

    def undo(self) -> None:
        self.session._set_document(self.old_document)


class MoveElementCmd(ReplaceDocumentCmd):
    """
    A finished move of one element.

    Consecutive moves of the same element (e.g. arrow-key nudges) merge
    into a single undo step.
    """

    MERGE_ID = 1001

    def __init__(
        self,
        session: LabelSession,
        element_id: str,
        old_document: LabelDocument,
        new_document: LabelDocument,
        text: str = "Move element",
    ):
        super().__init__(session, old_document, new_document, text)
        self.element_id = element_id

    def id(self) -> int:
        return self.MERGE_ID

    def mergeWith(self, other: QtGui.QUndoCommand) -> bool:
        if not isinstance(other, MoveElementCmd) or other.element_id != self.element_id:
            return False
        self.new_document = other.new_document
        return True
