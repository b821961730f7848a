# backend/vx_core/vaccinations/management/commands/seed_guidelines.py

from django.core.management.base import BaseCommand

from vx_core.vaccinations.guidelines_us import US_GUIDELINES
from vx_core.vaccinations.services import GuidelineService


class Command(BaseCommand):
    help = "Load the default US vaccination guideline table (idempotent)."

    def handle(self, *args, **options):
        created, updated = GuidelineService.upsert_many(US_GUIDELINES)
        self.stdout.write(self.style.SUCCESS(f"Guidelines ensured. Newly created: {created}, refreshed: {updated}"))
