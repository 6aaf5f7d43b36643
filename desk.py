"""
Desk backend — headless runner
==============================
Mediates between the desktop front end and the REST API: holds the login
token, sends authenticated calls, and polls for new notifications in the
background.

Usage:
    API_BASE_URL=http://localhost:3000 DESK_USERNAME=... DESK_PASSWORD=... python desk.py
"""

import sys

from desk_core.runner import main

if __name__ == "__main__":
    sys.exit(main())
