# storage/management/commands/seed_pos.py

from django.core.management.base import BaseCommand

from storage.services.seeding import seed_once


class Command(BaseCommand):
    help = "Seed the POS store (starter catalog, default cashier, empty ledger) exactly once"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding POS store..."))

        if seed_once():
            self.stdout.write(self.style.SUCCESS("✅ POS store seeded successfully."))
        else:
            self.stdout.write("✔ POS store already seeded; nothing to do.")
