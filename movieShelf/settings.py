from pathlib import Path
import os
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

STORE_BACKEND     = os.getenv("MOVIE_SHELF_STORE", "sqlite").strip().lower()
SUPABASE_URL      = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

# File / folder paths
DATABASE_PATH = Path(os.getenv("MOVIE_SHELF_DB", BASE_DIR / "movie_shelf.sqlite"))
SCHEMA_PATH   = BASE_DIR / "movie_shelf_schema.sql"
LOG_PATH      = Path(os.getenv("MOVIE_SHELF_LOG", BASE_DIR / "movie_shelf_debug.log"))

# Remote store
REQUEST_TIMEOUT    = float(os.getenv("MOVIE_SHELF_TIMEOUT", "10"))
ENRICH_MAX_WORKERS = int(os.getenv("MOVIE_SHELF_WORKERS", "8"))

# Dashboard
TOP_RATED_LIMIT      = 5
RECENT_REVIEWS_LIMIT = 5
UNKNOWN_MOVIE_TITLE  = "Unknown"

# Admin form: every editable movie column, all required
MOVIE_FORM_FIELDS = (
    "title", "year", "poster", "genres", "director",
    "cast_members", "country", "language", "synopsis",
)
