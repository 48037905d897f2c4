"""PDF Rendering Service Interface

Defines the contract for turning a document model into a printable file.
"""

from abc import ABC, abstractmethod
from invoicebook.domain.document import DocumentModel


class PdfService(ABC):
    """
    Service interface for PDF rendering

    Receives an already-projected document; it decides layout only, never
    which blocks or lines appear.
    """

    @abstractmethod
    def render_document(self, document: DocumentModel) -> bytes:
        """
        Render a document model to PDF

        Args:
            document: Projected invoice document

        Returns:
            PDF document as bytes
        """
        pass
