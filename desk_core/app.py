"""
DeskBackend — wires config, credentials, gateway, event sink and the
polling controller together, and exposes the command table the GUI bridge
calls into.

Commands run on the caller's thread and fail fast: errors are returned to
the caller as a message, never retried here.
"""

import inspect

from .config import log, load_config
from .constants import MAX_POLL_INTERVAL_SEC, MIN_POLL_INTERVAL_SEC, POLL_INTERVAL_SEC
from .credentials import CredentialStore
from .errors import GatewayError, InvalidArgument, describe_error
from .events import QueueEventSink
from .gateway import ApiGateway
from .lifecycle import PollingController
from .poller import NotificationPoller
from . import auth
from . import notifications


class DeskBackend:
    def __init__(self, config=None, credentials=None, gateway=None, sink=None):
        self.config = config or load_config()
        self.credentials = credentials or CredentialStore()
        self.gateway = gateway or ApiGateway(self.config, self.credentials)
        self.sink = sink or QueueEventSink()
        self._poll_interval = POLL_INTERVAL_SEC
        self.polling = PollingController(self._new_poller)
        self._commands = {
            "login": self.login,
            "register": self.register,
            "logout": self.logout,
            "get_me": self.get_me,
            "request": self.request,
            "get_notification_count": self.get_notification_count,
            "get_notifications": self.get_notifications,
            "dismiss_notification": self.dismiss_notification,
            "dismiss_all_notifications": self.dismiss_all_notifications,
            "manual_refresh_notifications": self.manual_refresh_notifications,
            "start_notification_polling": self.start_notification_polling,
            "stop_notification_polling": self.stop_notification_polling,
            "update_notification_polling": self.update_notification_polling,
            "polling_status": self.polling_status,
        }

    def _new_poller(self):
        return NotificationPoller(
            self.gateway, self.credentials, self.sink, interval=self._poll_interval,
        )

    # ─── Command dispatch ────────────────────────────────────

    @property
    def command_names(self):
        return sorted(self._commands)

    def invoke(self, name, **kwargs):
        """Run a command by name. Returns {"ok", "data"} or {"ok", "error", "kind"}."""
        handler = self._commands.get(name)
        if handler is None:
            return {"ok": False, "error": f"Unknown command: {name}", "kind": "unknown_command"}
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as e:
            log.warning("Command %s rejected arguments: %s", name, e)
            return {"ok": False, "error": f"Invalid arguments for {name}: {e}", "kind": "invalid_arguments"}
        try:
            return {"ok": True, "data": handler(**kwargs)}
        except GatewayError as e:
            if e.kind != "unauthenticated":
                log.warning("Command %s failed: %s", name, e.message)
            return {"ok": False, "error": describe_error(e), "kind": e.kind}

    # ─── Auth ────────────────────────────────────────────────

    def login(self, username, password):
        return auth.login(self.gateway, self.credentials, username, password)

    def register(self, username, password):
        return auth.register(self.gateway, self.credentials, username, password)

    def logout(self):
        auth.logout(self.credentials)

    def get_me(self):
        return auth.get_me(self.gateway)

    # ─── Generic pass-through for the CRUD layer ─────────────

    def request(self, method, path, body=None, auth_required=True):
        return self.gateway.call(method, path, body, auth_required=auth_required)

    # ─── Notifications ───────────────────────────────────────

    def get_notification_count(self):
        return notifications.get_notification_count(self.gateway)

    def get_notifications(self, include_dismissed=False):
        return notifications.get_notifications(self.gateway, include_dismissed)

    def dismiss_notification(self, notification_id):
        notifications.dismiss_notification(self.gateway, notification_id)

    def dismiss_all_notifications(self):
        return notifications.dismiss_all_notifications(self.gateway)

    def manual_refresh_notifications(self):
        unread, items = notifications.manual_refresh_notifications(self.gateway, self.sink)
        return {"unread": unread, "items": items}

    # ─── Polling lifecycle ───────────────────────────────────

    def start_notification_polling(self):
        return self.polling.start()

    def stop_notification_polling(self):
        return self.polling.stop()

    def update_notification_polling(self, interval):
        try:
            interval = int(interval)
        except (TypeError, ValueError):
            raise InvalidArgument(f"Polling interval must be a whole number of seconds, got {interval!r}")
        if not MIN_POLL_INTERVAL_SEC <= interval <= MAX_POLL_INTERVAL_SEC:
            raise InvalidArgument(
                f"Polling interval must be between {MIN_POLL_INTERVAL_SEC} "
                f"and {MAX_POLL_INTERVAL_SEC} seconds"
            )
        self._poll_interval = interval
        self.polling.update_interval(interval)
        return interval

    def polling_status(self):
        return {"running": self.polling.is_running, "state": self.polling.snapshot()}

    def shutdown(self):
        self.polling.stop()
        log.info("Backend shut down.")
