"""UpdateSettings Use Case

Saves business profile, payment details, invoice defaults and preferences.
"""

from libs.result import Result, Return
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.app.workspace import Workspace
from invoicebook.domain.money import parse_amount
from invoicebook.domain.settings import whole_days
from .dtos import UpdateSettingsCommandDTO, SettingsResponseDTO
from .persistence import persist_snapshot


class UpdateSettings:
    """
    Use Case: Update settings

    Business Rules:
    1. Omitted sections are left unchanged
    2. Profile and payment sections are replaced as a whole
    3. Invoice defaults are merged field by field; next_number is never
       writable here so numbers cannot be reused
    4. A new default tax rate never changes existing invoices
    5. Numeric defaults are read leniently; unreadable input counts as 0
    """

    def __init__(
        self,
        workspace: Workspace,
        uow: UnitOfWork,
        snapshot_repo: SnapshotRepository,
    ):
        self.workspace = workspace
        self.uow = uow
        self.snapshot_repo = snapshot_repo

    async def execute(self, command: UpdateSettingsCommandDTO) -> Result[SettingsResponseDTO]:
        settings = self.workspace.settings

        if command.profile is not None:
            settings.profile = command.profile.model_copy()

        if command.payment is not None:
            settings.payment = command.payment.model_copy()

        if command.invoice is not None:
            defaults = command.invoice
            if defaults.currency is not None:
                settings.invoice.currency = defaults.currency
            if defaults.tax_rate is not None:
                settings.invoice.tax_rate = parse_amount(defaults.tax_rate)
            if defaults.prefix is not None:
                settings.invoice.prefix = defaults.prefix
            if defaults.payment_terms is not None:
                settings.invoice.payment_terms = whole_days(defaults.payment_terms)

        if command.dark_mode is not None:
            settings.app.dark_mode = command.dark_mode

        persisted = await persist_snapshot(self.uow, self.snapshot_repo, self.workspace.snapshot)
        return Return.ok(SettingsResponseDTO(settings=settings, persisted=persisted))
