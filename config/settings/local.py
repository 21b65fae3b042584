# config/settings/local.py
from .base import *  # noqa

DEBUG = True
LOGGING["loggers"]["rentflow"]["level"] = "DEBUG"  # noqa: F405
