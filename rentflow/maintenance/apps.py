from django.apps import AppConfig


class MaintenanceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rentflow.maintenance"
    verbose_name = "Maintenance requests"
