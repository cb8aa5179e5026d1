# Environment-driven settings. A local .env file is honored.
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

SCHEMAS_PATH = Path(os.getenv("QSFILTER_SCHEMAS_FILE", "config/schemas.yaml"))
GLOBAL_MAX_LIMIT = int(os.getenv("GLOBAL_MAX_LIMIT", "1000"))
DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "100"))
DEFAULT_PARAMSTYLE = os.getenv("DEFAULT_PARAMSTYLE", "qmark")

origins_raw = os.getenv("CORS_ALLOW_ORIGINS", "")
CORS_ALLOW_ORIGINS = [o.strip() for o in origins_raw.split(",") if o.strip()]
