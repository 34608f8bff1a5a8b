"""Static configuration for dmgate.

Paths and filter knobs live in an optional config.json next to the project
(or wherever DMGATE_SETTINGS points), with environment overrides for the two
file locations so containers can remap them without editing JSON.
"""

import json
import os

from dotenv import load_dotenv

from core.config import DEFAULT_TOKENS_PER_SESSION, FilterConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

SETTINGS_PATH = os.getenv("DMGATE_SETTINGS", os.path.join(PROJECT_ROOT, "config.json"))

_HOST_HOME = os.path.join(os.path.expanduser("~"), ".openclaw")


def _load_json_config(path: str) -> dict:
    """Load config.json; a missing file means all defaults."""

    if not os.path.exists(path):
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config(SETTINGS_PATH)

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Gateway config holds messages.groupChat.mentionPatterns; it is re-read per message.
_paths = _CONFIG.get("paths", {})
GATEWAY_CONFIG_PATH = os.path.expanduser(
    os.getenv("DMGATE_GATEWAY_CONFIG", _paths.get("gateway_config", os.path.join(_HOST_HOME, "openclaw.json")))
)
# Admin policy (God Mode roster and rules) is cached by mtime.
ADMIN_CONFIG_PATH = os.path.expanduser(
    os.getenv("DMGATE_ADMIN_CONFIG", _paths.get("admin_config", os.path.join(_HOST_HOME, "admin", "config.json")))
)

# Filter knobs:
# - PLATFORM: roster entries must carry this platform tag to bypass the filter
# - SENDER_SUFFIX: transport domain marker stripped from sender ids
# - COUNTRY_CODE: the one region whose numbers match in +CC/CC/0 forms
# - TOKENS_PER_SESSION: estimate credited to tokens_saved per dropped message
_filter = _CONFIG.get("filter", {})
PLATFORM = _filter.get("platform", "whatsapp")
SENDER_SUFFIX = _filter.get("sender_suffix", "@s.whatsapp.net")
COUNTRY_CODE = str(_filter.get("country_code", "972"))
TOKENS_PER_SESSION = int(_filter.get("tokens_per_session", DEFAULT_TOKENS_PER_SESSION))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {"enabled": True, "level": "INFO"})


def build_filter_config() -> FilterConfig:
    """Return the core FilterConfig for the current settings."""

    return FilterConfig(
        platform=PLATFORM,
        sender_suffix=SENDER_SUFFIX,
        country_code=COUNTRY_CODE,
        tokens_per_session=TOKENS_PER_SESSION,
    )
