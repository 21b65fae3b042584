# backend/rentflow/contracts/management/commands/expire_contracts.py
from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from rentflow.contracts.services import expire_overdue_contracts, overdue_contracts_count


class Command(BaseCommand):
    help = "Mark ACTIVE contracts whose end_date has passed as EXPIRED (one run of the daily job)."

    def add_arguments(self, parser):
        parser.add_argument("--today", type=str, default=None, help="Override today's date (YYYY-MM-DD).")
        parser.add_argument("--dry-run", action="store_true", help="Print the count only; do not write.")

    def handle(self, *args, **opts):
        today = None
        if opts["today"]:
            try:
                today = date.fromisoformat(opts["today"])
            except ValueError as exc:
                raise CommandError(f"Invalid --today value: {opts['today']}") from exc

        if opts["dry_run"]:
            self.stdout.write(f"DRY RUN: contracts that would expire: {overdue_contracts_count(today)}")
            return

        count = expire_overdue_contracts(today)
        self.stdout.write(self.style.SUCCESS(f"Contracts expired: {count}"))
