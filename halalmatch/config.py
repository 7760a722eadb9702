from dotenv import load_dotenv
import os

load_dotenv()

# Register source
REGISTER_URL = os.getenv(
    "HALAL_REGISTER_URL",
    "https://raw.githubusercontent.com/zootato/singapore-halal-establishments/main/halal_establishments.json",
)

# Register loading
LOAD_ATTEMPTS = 3
LOAD_TIMEOUT = 10
BACKOFF_BASE = 2

# Matching parameters
FUZZY_THRESHOLD = 0.9
WORD_SIMILARITY_THRESHOLD = 0.8
MIN_MATCHING_WORDS = 2

# Runtime parameters
BATCH_SIZE = 25
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# File names
INPUT_CSV = os.getenv("MERCHANTS_CSV", "merchants.csv")
OUTPUT_CSV = os.getenv("ENRICHED_CSV", "merchants_enriched.csv")
