"""Seed default data and migrate embedded event dates."""

from django.conf import settings
from django.core.management.base import BaseCommand

from venue.services.data_layer import DataLayer
from venue.stores.django_store import DjangoKeyValueStore


class Command(BaseCommand):
    help = "Seed empty venue collections and migrate legacy event dates (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--prefix",
            default=None,
            help="Storage key prefix (defaults to VENUE['KEY_PREFIX']).",
        )

    def handle(self, *args, **options):
        prefix = options["prefix"] or settings.VENUE["KEY_PREFIX"]
        report = DataLayer(DjangoKeyValueStore(), key_prefix=prefix).bootstrap()
        seeded = ", ".join(report.seeded) or "nothing"
        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {seeded}; migrated {report.migrated_dates} event dates."
            )
        )
