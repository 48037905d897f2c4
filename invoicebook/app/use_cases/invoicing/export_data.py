"""ExportData Use Case

Serializes the full snapshot for download.
"""

import time
from invoicebook.domain.base import utc_now
from libs.result import Result, Return
from invoicebook.app.workspace import Workspace
from .dtos import ExportDataResponseDTO


def export_file_name(timestamp_ms: int) -> str:
    return f"invoice_data_{timestamp_ms}.json"


class ExportData:
    """
    Use Case: Export all data as JSON

    The export is the snapshot exactly as it is stored, pretty-printed;
    loading it back reproduces the data set.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    async def execute(self) -> Result[ExportDataResponseDTO]:
        snapshot = self.workspace.snapshot
        return Return.ok(
            ExportDataResponseDTO(
                file_name=export_file_name(int(time.time() * 1000)),
                content=snapshot.to_json(indent=2),
                invoice_count=len(snapshot.invoices),
                client_count=len(snapshot.clients),
                exported_at=utc_now(),
            )
        )
