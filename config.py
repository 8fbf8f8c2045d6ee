import os
from dotenv import load_dotenv

# Load .env so paths and thresholds can be configured there
load_dotenv()

# Central place for simple configuration values used across modules
BASE_OUTPUT_DIR = os.getenv("BASE_OUTPUT_DIR", "./outputs")
CAMPUS_DB_PATH = os.getenv("CAMPUS_DB_PATH", os.path.join(BASE_OUTPUT_DIR, "campus.db"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Minimum name similarity (0-1) for linking an imported POI to a building or open space
POI_MATCH_THRESHOLD = float(os.getenv("POI_MATCH_THRESHOLD", "0.6"))

ALLOWED_IMPORT_EXTENSIONS = ('.json', '.geojson')

# Ensure output directory exists early
os.makedirs(BASE_OUTPUT_DIR, exist_ok=True)
