"""Advisory uniqueness checks for client tax IDs and emails."""
from uuid import UUID

from src.app.core.domain.models import Client, Conflict
from src.app.core.interfaces.client_store import ClientStore


class UniquenessGuard:
    """
    Looks for other clients already holding a tax ID or email.

    The check and the subsequent write are separate store round trips, so two
    concurrent callers can both pass it. The store's own unique constraints are
    the authoritative backstop; this guard is the fast, descriptive rejection.
    """

    def __init__(self, store: ClientStore):
        self.store = store

    async def check_conflicts(
        self,
        tax_id: str,
        email: str,
        exclude_id: UUID | None = None,
    ) -> Conflict | None:
        """
        Report the first conflict, checking the tax ID before the email.

        Args:
            tax_id: Candidate tax identifier
            email: Candidate email
            exclude_id: ID of the client being updated, None when creating

        Returns:
            The tax ID conflict if any, else the email conflict if any, else None
        """
        holder = await self.store.find_by_tax_id(tax_id)
        if self._is_other(holder, exclude_id):
            return Conflict(field="tax_id", value=tax_id, existing_id=holder.id)

        holder = await self.store.find_by_email(email)
        if self._is_other(holder, exclude_id):
            return Conflict(field="email", value=email, existing_id=holder.id)

        return None

    @staticmethod
    def _is_other(holder: Client | None, exclude_id: UUID | None) -> bool:
        return holder is not None and holder.id != exclude_id
