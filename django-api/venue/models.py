"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class StoredValue(models.Model):
    """One key of the venue key/value store, holding a JSON document."""

    key = models.CharField(primary_key=True, max_length=100)
    payload = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key
