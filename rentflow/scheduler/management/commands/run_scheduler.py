# backend/rentflow/scheduler/management/commands/run_scheduler.py
from __future__ import annotations

from apscheduler.schedulers.blocking import BlockingScheduler
from django.conf import settings
from django.core.management.base import BaseCommand

from rentflow.scheduler.runner import build_scheduler


class Command(BaseCommand):
    help = "Run the daily jobs (payment generation 01:00, contract expiry 02:00) in the foreground."

    def handle(self, *args, **opts):
        scheduler = build_scheduler(BlockingScheduler)
        for job in scheduler.get_jobs():
            self.stdout.write(f"registered {job.id}: {job.name}")
        self.stdout.write(self.style.SUCCESS(f"Scheduler running (timezone {settings.SCHEDULER_TIMEZONE}). Ctrl+C to stop."))
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            scheduler.shutdown()
            self.stdout.write("Scheduler stopped.")
