import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG_DIR = PROJECT_ROOT / "config"

# Run logs go under the project unless CURATION_LOG_DIR points elsewhere
LOG_DIR = Path(os.getenv("CURATION_LOG_DIR", PROJECT_ROOT / "logs"))

# === Files ===
CONSTANTS_PATH = CONFIG_DIR / "constants.json"
LOG_PATH = LOG_DIR / "curation_run.log"
