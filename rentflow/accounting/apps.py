from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rentflow.accounting"
    verbose_name = "Accounting ledger"
