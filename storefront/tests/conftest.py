from __future__ import annotations

import os
import tempfile

# Configuration is read once at import time, so point it at scratch paths
# before any storefront module loads.
_TMP_DIR = tempfile.mkdtemp(prefix="storefront-tests-")

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'storefront.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "storefront.log")
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-0123456789"
os.environ["ENABLE_RATE_LIMIT"] = "false"
os.environ["ADMIN_REQUIRES_FLAG"] = "true"
for _name in ("ADMIN_EMAIL", "ADMIN_PASSWORD", "SMTP_HOST"):
    os.environ.pop(_name, None)
