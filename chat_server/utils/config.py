import os
from dotenv import load_dotenv

# load .env located at the repository root (relative, robust across machines)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DOTENV_PATH = os.path.join(BASE_DIR, ".env")
load_dotenv(dotenv_path=DOTENV_PATH)


def _as_int(val, default):
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def _as_float(val, default):
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


# Answering backend
BACKEND_URL = os.getenv('BACKEND_URL', 'https://gemini-backend-ca0r.onrender.com/api/chat')
BACKEND_TIMEOUT = _as_float(os.getenv('BACKEND_TIMEOUT'), 30.0)

# OpenAI
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# Enrichment: llm | heuristic (normalizer), llm | heuristic | backend (extractor)
NORMALIZER_MODE = os.getenv('NORMALIZER_MODE', 'llm').lower()
EXTRACTION_MODE = os.getenv('EXTRACTION_MODE', 'llm').lower()
# unset means no truncation of the extracted place list
MAX_PLACES = _as_int(os.getenv('MAX_PLACES'), None)

# Image lookup (Wikipedia pageimages)
IMAGE_SEARCH_URL = os.getenv('IMAGE_SEARCH_URL', 'https://en.wikipedia.org/w/api.php')
IMAGE_THUMB_SIZE = _as_int(os.getenv('IMAGE_THUMB_SIZE'), 600)
IMAGE_TIMEOUT = _as_float(os.getenv('IMAGE_TIMEOUT'), 10.0)

# Map links
MAPS_SEARCH_URL = os.getenv('MAPS_SEARCH_URL', 'https://www.google.com/maps/search/')
COUNTRY_QUALIFIER = os.getenv('COUNTRY_QUALIFIER', 'Colombia')

# CORS
CORS_ORIGINS = os.getenv(
    'CORS_ORIGINS',
    'http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173,http://127.0.0.1:3000',
)

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
