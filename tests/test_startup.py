import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


def _run(*args):
    env = {**os.environ, "DJANGO_ENV": "test", "DJANGO_SETTINGS_MODULE": "config.settings"}
    return subprocess.run(
        [sys.executable, *args],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


@pytest.mark.parametrize(
    "first_import",
    [
        "rentflow.common.api.exceptions",
        "rentflow.iam.auth",
        "rest_framework.views",
    ],
)
def test_modules_import_in_a_fresh_interpreter(first_import):
    code = (
        "import django; django.setup(); "
        f"import {first_import}; "
        "from rest_framework.settings import api_settings; "
        "api_settings.DEFAULT_AUTHENTICATION_CLASSES; "
        "from rentflow.common.api.exceptions import api_exception_handler"
    )
    proc = _run("-c", code)

    assert proc.returncode == 0, proc.stderr


def test_manage_check_passes():
    proc = _run("manage.py", "check")

    assert proc.returncode == 0, proc.stderr
