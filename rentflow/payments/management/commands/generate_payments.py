# backend/rentflow/payments/management/commands/generate_payments.py
from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from rentflow.payments.generator import generate_pending_payments


class Command(BaseCommand):
    help = "Create the missing PENDING rent payments for every ACTIVE contract (one run of the daily job)."

    def add_arguments(self, parser):
        parser.add_argument("--today", type=str, default=None, help="Override today's date (YYYY-MM-DD).")
        parser.add_argument("--dry-run", action="store_true", help="Print what would be created; do not write.")

    def handle(self, *args, **opts):
        today = None
        if opts["today"]:
            try:
                today = date.fromisoformat(opts["today"])
            except ValueError as exc:
                raise CommandError(f"Invalid --today value: {opts['today']}") from exc

        result = generate_pending_payments(today, dry_run=opts["dry_run"])

        self.stdout.write(f"Contracts scanned: {result.contracts_scanned}")
        if opts["dry_run"]:
            for p in result.payments:
                self.stdout.write(f"  contract {p.contract_id}: {p.period_start} - {p.period_end} amount={p.amount}")
            self.stdout.write(f"DRY RUN: payments that would be created: {result.created}")
        else:
            self.stdout.write(self.style.SUCCESS(f"Payments created: {result.created}"))
