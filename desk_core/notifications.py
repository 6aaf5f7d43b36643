"""
Notification commands — count, list, dismiss, manual refresh.

Responses use the API's envelope: {"success", "status_code", "message",
"timestamp", "data"}. Count data is {"total", "unread"}; list data is an
array of {"notification": {...}, "targets": [...], "dismissed": bool}.
"""

from .config import log
from .constants import (
    DISMISS_ALL_PATH, DISMISS_NOTIFICATION_PATH, EVENT_COUNT_UPDATED,
    EVENT_NOTIFICATIONS_REFRESHED, NOTIFICATION_COUNT_PATH, NOTIFICATIONS_PATH,
)
from .errors import DecodeError
from .gateway import decode_json


def parse_unread_count(text) -> int:
    data = decode_json(text, "notification count")
    inner = data.get("data") if isinstance(data, dict) else None
    unread = inner.get("unread") if isinstance(inner, dict) else None
    if isinstance(unread, bool) or not isinstance(unread, int):
        raise DecodeError("Notification count response has no integer data.unread")
    return unread


def parse_notification_list(text) -> list:
    data = decode_json(text, "notifications")
    items = data.get("data") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise DecodeError("Notifications response has no data array")
    return items


def get_notification_count(gateway) -> int:
    """Unread count for the logged-in user."""
    return parse_unread_count(gateway.get(NOTIFICATION_COUNT_PATH))


def get_notifications(gateway, include_dismissed=False) -> list:
    flag = "true" if include_dismissed else "false"
    text = gateway.get(f"{NOTIFICATIONS_PATH}?include_dismissed={flag}")
    return parse_notification_list(text)


def dismiss_notification(gateway, notification_id):
    gateway.post(DISMISS_NOTIFICATION_PATH.format(id=int(notification_id)))
    log.info("Dismissed notification %s", notification_id)


def dismiss_all_notifications(gateway):
    text = gateway.post(DISMISS_ALL_PATH)
    log.info("Dismissed all notifications")
    return text


def manual_refresh_notifications(gateway, sink):
    """Fetch count + full list on demand and push both to the UI.

    Errors propagate to the caller; nothing is emitted for a step that failed.
    """
    unread = get_notification_count(gateway)
    sink.emit(EVENT_COUNT_UPDATED, unread)
    items = get_notifications(gateway)
    sink.emit(EVENT_NOTIFICATIONS_REFRESHED, items)
    log.info("Manual refresh completed (%d unread, %d listed)", unread, len(items))
    return unread, items


def notification_title(item):
    """Title of a list entry, tolerant of both wrapped and flat shapes."""
    inner = item.get("notification", item) if isinstance(item, dict) else {}
    return str(inner.get("title", "")) if isinstance(inner, dict) else ""
