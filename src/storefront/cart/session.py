"""Repository-backed cart store — one saved snapshot per shopping session."""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.store import CartStore
from storefront.domain import storefront


@storefront.aggregate
class SavedCartSession:
    session_id = Identifier(identifier=True, required=True)
    snapshot = Text(required=True)  # JSON: registry snapshot
    saved_at = DateTime()


class RepositoryCartStore(CartStore):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id

    def load(self) -> dict | None:
        try:
            session = current_domain.repository_for(SavedCartSession).get(self.session_id)
        except ObjectNotFoundError:
            return None
        return json.loads(session.snapshot)

    def save(self, snapshot: dict) -> None:
        repo = current_domain.repository_for(SavedCartSession)
        payload = json.dumps(snapshot)
        now = datetime.now(UTC)

        try:
            session = repo.get(self.session_id)
        except ObjectNotFoundError:
            session = SavedCartSession(session_id=self.session_id, snapshot=payload, saved_at=now)
        else:
            session.snapshot = payload
            session.saved_at = now

        repo.add(session)
