# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-change-me")

    # Logging (Flask app.logger)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Editor defaults for a new session
    DEFAULT_TEMPLATE_NAME = os.getenv("DEFAULT_TEMPLATE_NAME", "New Template")
    DEFAULT_PAPER_SIZE = os.getenv("DEFAULT_PAPER_SIZE", "A4")
    DEFAULT_FONT_SIZE_PX = int(os.getenv("DEFAULT_FONT_SIZE_PX", "9"))

    # Font size slider range (editor only; the layout engine itself never clamps)
    FONT_SIZE_MIN_PX = int(os.getenv("FONT_SIZE_MIN_PX", "7"))
    FONT_SIZE_MAX_PX = int(os.getenv("FONT_SIZE_MAX_PX", "12"))
