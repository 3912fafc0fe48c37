import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _get_list(name: str, default: tuple[str, ...]) -> list[str]:
    val = os.getenv(name)
    if not val:
        return list(default)
    items = [part.strip() for part in val.split(",")]
    return [item for item in items if item] or list(default)


def _read_secret_file(path: str | None) -> str | None:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return None


# --- Match data source ---
MATCH_DATA_PATH = os.getenv("MATCH_DATA_PATH") or os.path.join(REPO_ROOT, "match_data.csv")
CSV_DELIMITER = os.getenv("CSV_DELIMITER", ",") or ","

# --- Gemini settings ---
DEFAULT_GEMINI_MODELS = ("gemini-2.0-flash", "gemini-1.5-pro", "gemini-pro", "gemini-1.0-pro")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or _read_secret_file(os.getenv("GEMINI_API_KEY_FILE"))
GEMINI_MODELS = _get_list("GEMINI_MODELS", DEFAULT_GEMINI_MODELS)
GEMINI_TIMEOUT_S = float(os.getenv("GEMINI_TIMEOUT_S", "30"))

# --- HTTP server ---
PORT = int(os.getenv("PORT", "3000"))
CORS_ORIGINS = _get_list(
    "CORS_ORIGINS",
    (
        "http://localhost:3000",
        "https://play2win-bs0z.onrender.com",
        "http://localhost:5500",  # local file preview
    ),
)
