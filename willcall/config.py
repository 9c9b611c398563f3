import os

from dotenv import load_dotenv

# Load .env from the working directory (or the nearest parent that has one)
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value not in ("0", "false", "no", "off")


# Output
DEFAULT_OUTPUT = os.getenv("WILLCALL_OUT", "list.csv").strip() or "list.csv"
OUTPUT_ENCODING = os.getenv("WILLCALL_OUTPUT_ENCODING", "utf-8").strip() or "utf-8"

# Logging
LOG_LEVEL = os.getenv("WILLCALL_LOG_LEVEL", "INFO").strip() or "INFO"

# Vendor strategy flags
GROUPON_REQUIRE_PURCHASED = _env_flag("WILLCALL_GROUPON_REQUIRE_PURCHASED", True)
