import sys
from pathlib import Path

import pytest

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from memo_service.settings import settings


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Pin the settings the memo core reads at call time."""
	original_roles = settings.privileged_roles
	original_webhooks = settings.webhooks_enabled
	original_sampling = settings.obs_log_sampling_rate_info
	settings.privileged_roles = ("host", "admin")
	settings.webhooks_enabled = True
	settings.obs_log_sampling_rate_info = 1.0
	try:
		yield
	finally:
		settings.privileged_roles = original_roles
		settings.webhooks_enabled = original_webhooks
		settings.obs_log_sampling_rate_info = original_sampling
