import os

# Simulated latency of the credential form before the success callback fires
AUTH_DELAY_SECONDS = float(os.environ.get("AUTH_DELAY_SECONDS", 1.0))
MIN_PASSWORD_LENGTH = int(os.environ.get("MIN_PASSWORD_LENGTH", 6))

# A freshly mounted dashboard starts with the two demo tasks unless disabled
SEED_DEMO_TASKS = os.environ.get("SEED_DEMO_TASKS", "true").strip().lower() in {"1", "true", "yes", "on"}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Opaque per-browser key for the in-memory workspace; not a credential
WORKSPACE_COOKIE = os.environ.get("WORKSPACE_COOKIE", "taskflow_workspace")

# Upper bound on live workspaces; the least recently used one is dropped first
MAX_WORKSPACES = int(os.environ.get("MAX_WORKSPACES", 1000))
