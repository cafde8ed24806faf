import os

DEFAULT_SERVER_URL = os.getenv("CLOUDFILES_SERVER", "http://127.0.0.1:8080")

SETTINGS_ORG = "CloudFiles"
SETTINGS_APP = "Client"

# Delays before switching views, so the confirmation toast is visible.
LOGIN_REDIRECT_MS = 500
REGISTER_REDIRECT_MS = 1500
LOGOUT_REDIRECT_MS = 500

TOAST_DURATION_MS = 3000
TOAST_FADE_MS = 300
