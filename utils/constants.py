import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
ID_FIELDS = _constants["ID_FIELDS"]

MIN_PRIORITY_LEVEL = _constants["MIN_PRIORITY_LEVEL"]
MAX_PRIORITY_LEVEL = _constants["MAX_PRIORITY_LEVEL"]

SCORE_MAX = _constants["SCORE_MAX"]
SCORE_PENALTY_PER_FINDING = _constants["SCORE_PENALTY_PER_FINDING"]
TOP_FINDINGS_COUNT = _constants["TOP_FINDINGS_COUNT"]

DEFAULT_PRIORITIES = _constants["DEFAULT_PRIORITIES"]
PRIORITY_KEYS = tuple(DEFAULT_PRIORITIES)

RULE_TYPES = _constants["RULE_TYPES"]
FILTER_OPERATORS = _constants["FILTER_OPERATORS"]
EXPORT_FORMATS = _constants["EXPORT_FORMATS"]
UPLOAD_EXTENSIONS = _constants["UPLOAD_EXTENSIONS"]

AI_MODEL = _constants["AI_MODEL"]
AI_TIMEOUT_SECONDS = _constants["AI_TIMEOUT_SECONDS"]
