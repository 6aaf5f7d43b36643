"""
Constants: version, polling thresholds, endpoint paths, UI event names.
"""

BACKEND_VERSION = "0.3.0"

# ─── Defaults (overridable via environment, see config.py) ───────
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_API_TIMEOUT_SEC = 30

# ─── Polling thresholds ──────────────────────────────────────────
POLL_INTERVAL_SEC = 30         # Steady-state cadence between successful cycles
IDLE_INTERVAL_SEC = 10         # Re-check cadence while logged out
MIN_POLL_INTERVAL_SEC = 10      # Accepted range for user-set cadence
MAX_POLL_INTERVAL_SEC = 300
ERROR_THRESHOLD = 5            # Back off once consecutive errors exceed this
INITIAL_BACKOFF_SEC = 10
MAX_BACKOFF_SEC = 300          # 5 min cap
SUCCESS_RESET_STREAK = 3       # Successes needed to reset backoff to baseline

# ─── Endpoints ───────────────────────────────────────────────────
LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
ME_PATH = "/auth/me"
NOTIFICATION_COUNT_PATH = "/notifications/count"
NOTIFICATIONS_PATH = "/notifications"
DISMISS_NOTIFICATION_PATH = "/notifications/{id}/dismiss"
DISMISS_ALL_PATH = "/notifications/dismiss-all"

# ─── UI events ───────────────────────────────────────────────────
EVENT_COUNT_UPDATED = "notification_count_updated"
EVENT_NEW_NOTIFICATION = "new_notification"
EVENT_NOTIFICATIONS_REFRESHED = "notifications_refreshed"

# ─── Poll phases ─────────────────────────────────────────────────
PHASE_IDLE = "idle"
PHASE_POLLING = "polling"
PHASE_BACKING_OFF = "backing_off"
PHASE_CANCELLED = "cancelled"
