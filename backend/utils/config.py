"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch the real location store.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./locations.db",
    )

# "simulated" (desktop/dev) or "plyer" (device GPS).
LOCATION_PROVIDER = os.environ.get("LOCATION_PROVIDER", "simulated")

# Upper bound for a single position request, in seconds.
LOCATION_TIMEOUT_S = float(os.environ.get("LOCATION_TIMEOUT_S", "20"))

SIMULATED_LATITUDE = float(os.environ.get("SIMULATED_LATITUDE", "-23.55"))
SIMULATED_LONGITUDE = float(os.environ.get("SIMULATED_LONGITUDE", "-46.63"))
SIMULATED_PERMISSION = os.environ.get("SIMULATED_PERMISSION", "granted")

DARK_MODE_KEY = os.environ.get("DARK_MODE_KEY", "darkMode")
