"""
Headless entry point: log in from the environment, poll, print UI events.

Handy for exercising the backend against a dev API without the GUI.
"""

import json
import os
import sys

from .constants import BACKEND_VERSION
from .config import log, safe_print, load_config, setup_logging
from .app import DeskBackend
from .errors import GatewayError, describe_error


def _format_event(event):
    try:
        payload = json.dumps(event.payload, ensure_ascii=False)
    except (TypeError, ValueError):
        payload = repr(event.payload)
    return f"{event.name}: {payload}"


def main(env=None):
    """Primary entry point. Returns a process exit code."""
    config = load_config(env)
    setup_logging(config.log_level, config.log_file)
    env = os.environ if env is None else env

    safe_print("Desk backend v" + BACKEND_VERSION)
    log.info("API base URL: %s (timeout=%ds)", config.api_base_url, config.api_timeout_seconds)

    backend = DeskBackend(config)

    username = env.get("DESK_USERNAME")
    password = env.get("DESK_PASSWORD")
    if username and password:
        try:
            backend.login(username, password)
        except GatewayError as e:
            log.error("Login failed: %s", describe_error(e))
            return 1
    else:
        log.info("DESK_USERNAME/DESK_PASSWORD not set; polling will stay idle until login")

    backend.start_notification_polling()
    try:
        while True:
            event = backend.sink.get(timeout=1.0)
            if event is not None:
                safe_print(_format_event(event))
    except KeyboardInterrupt:
        safe_print("\nStopped by user.")
    finally:
        backend.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
