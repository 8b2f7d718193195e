"""Base abstract models shared by the persistence layer.

Provides ``BaseModel``: UUIDv7 primary key + created_at / updated_at.

Unlike a typical ``auto_now`` model, the timestamps are plain columns:
the domain aggregate owns its ``created_at``/``updated_at`` and the record
mirrors whatever the aggregate says.  Defaults only apply to rows built
outside the domain (fixtures, admin).
"""

from __future__ import annotations

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp columns."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        abstract = True
