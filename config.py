import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Type inference: rows sampled per column and the share a type must exceed
TYPE_SAMPLE_SIZE = int(os.getenv("TYPE_SAMPLE_SIZE", "100"))
TYPE_THRESHOLD = float(os.getenv("TYPE_THRESHOLD", "0.8"))

# Query answers
TOP_N = int(os.getenv("TOP_N", "10"))
TABLE_DISPLAY_ROWS = int(os.getenv("TABLE_DISPLAY_ROWS", "10"))
STRICT_INTENTS = os.getenv("STRICT_INTENTS", "false").lower() in ("1", "true", "yes")

# Uploads
MAX_UPLOAD_MB = float(os.getenv("MAX_UPLOAD_MB", "25"))
ALLOWED_EXTENSIONS = (".xlsx", ".xls")

# Streamlit front end
BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")
FRONTEND_THINKING_DELAY = float(os.getenv("FRONTEND_THINKING_DELAY", "1.5"))
