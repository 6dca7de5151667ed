import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv


# ---------------------------------------------------------
# Load .env from project root (same folder as app.py)
# Values already exported in the shell win.
# ---------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]  # project root
load_dotenv(ROOT / ".env", override=False)

# ---------------------------------------------------------
# Test-safe defaults: never touch the developer's app.db,
# never write PDFs to disk, never talk to the real relay.
# ---------------------------------------------------------
_TMP_DIR = tempfile.mkdtemp(prefix="invoice-service-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TMP_DIR) / 'app.db'}"
os.environ["CORS_API_KEY"] = "test-relay-key"
os.environ["CORS_PROXY_URL"] = "https://relay.test/"
os.environ["TAKEALOT_BASE_URL"] = "https://seller-api.test/v2"
os.environ["INVOICE_UTC_OFFSET_HOURS"] = "2"
os.environ.pop("PDF_SAVE_DIR", None)
