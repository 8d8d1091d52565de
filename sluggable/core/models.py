from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


class SoftDeleteMixin:
    """
    Capacidade de soft delete.

    Models com este mixin têm as linhas com `deleted_at` preenchido
    ignoradas na busca de slugs existentes, a menos que a opção
    `include_trashed` esteja ativa.
    """

    soft_deletes = True

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        index=True
    )

    def soft_delete(self):
        self.deleted_at = datetime.now(timezone.utc)
