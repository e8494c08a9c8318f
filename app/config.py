import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============================================================================#
# ENVIRONMENT / SERVICES
# ============================================================================#
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")  # Gemini Flash (plant diagnosis)
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")

# Attribution headers sent to OpenRouter
APP_REFERER = os.getenv("APP_REFERER", "https://plant-doctor.local")
APP_TITLE = os.getenv("APP_TITLE", "Plant Doctor Image Diagnosis")

# ============================================================================#
# DIAGNOSIS
# ============================================================================#
# Fixed model identifier, not overridable at runtime
DIAGNOSIS_MODEL = "google/gemini-2.5-flash"

# Prompt/response profile: "structured" (strict schema) or "freeform"
DIAGNOSIS_PROFILE = os.getenv("DIAGNOSIS_PROFILE", "structured")
DIAGNOSIS_LANGUAGE = os.getenv("DIAGNOSIS_LANGUAGE")  # overrides the profile language

MAX_IMAGE_SIZE = 4 * 1024 * 1024  # 4 MiB

# Timeout configuration for API calls (seconds)
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "60"))
API_CONNECT_TIMEOUT = float(os.getenv("API_CONNECT_TIMEOUT", "15"))

# ============================================================================#
# SERVER
# ============================================================================#
APP_VERSION = "1.0.0"
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
