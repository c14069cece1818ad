from __future__ import annotations
import os

API_URL = os.environ.get("MOBCI_API_URL", "https://api.mobci.dev")
API_TOKEN = os.environ.get("MOBCI_TOKEN")
APP_CONFIG_FILE = "app.json"
EAS_CONFIG_FILE = "eas.json"
CREDENTIALS_JSON_FILE = "credentials.json"
