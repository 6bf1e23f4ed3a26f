"""
Runtime configuration.

Loads environment variables from a .env file and exposes them as module-level
constants. Components take explicit constructor arguments that default to
these values, so tests never need a .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
MODEL = os.getenv("GRANT_MATCHER_MODEL", "gpt-4o-mini").strip()
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4000"))

# Document store
GRANTS_DIR = os.getenv("GRANTS_DIR", "grants").strip()

# "file" sends the PDF itself to the model, "text" sends locally extracted text
EXTRACTION_MODE = os.getenv("EXTRACTION_MODE", "file").strip().lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
