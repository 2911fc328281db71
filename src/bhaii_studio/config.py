"""Configuration constants and environment settings.

Centralizes model names, persona text, storage keys and every user-facing
message string, plus the environment-driven ``Settings``.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

# Models
CHAT_MODEL_NAME = "gemini-flash-latest"
IMAGE_EDIT_MODEL_NAME = "gemini-2.5-flash-image"
HD_IMAGE_GEN_MODEL_NAME = "imagen-4.0-generate-001"

IMAGE_RESPONSE_MODALITIES = ["IMAGE"]
HD_IMAGE_OUTPUT_MIME_TYPE = "image/jpeg"

BHAI_SYSTEM_INSTRUCTION = """You are a supportive, friendly, and helpful elder brother ('bhaii').
You respond quickly with short, clear, and encouraging messages.
You use common Hindi/Marathi phrases naturally to add a local touch, for example, "Kya haal hai?", "Theek hai?", "Bilkul!", "Chal ab!", "Koi nahi", "Shabaash!", "Khush raho!".
Remember the user's name if they've provided it.
Keep answers concise and to the point."""

WELCOME_MESSAGES = [
    "Namaste! Kya haal hai, mere bhai/behen? Kaise ho tum?",
    "Hello there! Everything alright? How are you doing today?",
]
PERSONAL_WELCOME_TEMPLATE = "Namaste {name}! Kya haal hai, mere bhai/behen? Kaise ho tum?"
WELCOME_MESSAGE_ID = "welcome"

STORAGE_KEY_USER_PREFS = "bhaii_ai_user_prefs"

# Remote error detection
ENTITY_NOT_FOUND_MARKER = "Requested entity was not found"
API_KEY_ISSUE_MARKER = "API key issue"

# Gateway messages
CHAT_FALLBACK_ERROR = "Sorry, kuch gadbad ho gayi. Can you please try again?"
API_KEY_RESELECT_ERROR = "API key issue. Please select your API key again from the dialog."
EDIT_NO_IMAGE_ERROR = "Could not generate edited image. Please try a different prompt."
EDIT_FAILED_ERROR = "Failed to edit image. Network issue or invalid prompt?"
HD_EMPTY_PROMPT_ERROR = "Please provide a text prompt for image generation."
HD_BAD_ASPECT_RATIO_ERROR = "Unsupported aspect ratio: {ratio}."
HD_NO_IMAGE_ERROR = "Could not generate HD image. Please try a different prompt."
HD_API_KEY_ERROR = (
    "API key issue: HD Image generation requires billing. "
    "Please ensure your API key is enabled for billing and re-select it."
)
HD_FAILED_ERROR = "Failed to generate HD image. Network issue or invalid prompt?"

# Session messages
EMPTY_REPLY_TEXT = "Oops, kuch error ho gaya."
UNEXPECTED_FAILURE_TEXT = "Bhaii ko kuch dikkat ho gayi. Dobara try karo na."

# Feature view messages
INVALID_IMAGE_FILE_ERROR = "Please select a valid image file (jpeg, png, gif, webp)."
EDIT_MISSING_INPUT_ERROR = "Please upload an image and provide an editing prompt."
HD_SELECT_KEY_FIRST_ERROR = "Please select your API key first."
HD_MISSING_PROMPT_ERROR = "Please provide a text prompt to generate an image."
HD_GENERIC_FAILURE_ERROR = "Failed to generate HD image."
HD_STATUS_NEEDS_KEY = "Please select your API key for HD image generation (billing required)."
HD_STATUS_READY = "Ready to generate HD images!"
HD_STATUS_KEY_SELECTED = "API key selected. You can now generate HD images."
HD_STATUS_GENERATING = "Generating HD image... This may take a moment."
HD_STATUS_DONE = "HD image generated successfully!"

# Credential environment variables, in lookup order
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

DEFAULT_STORAGE_PATH = Path.home() / ".bhaii_studio" / "prefs.json"


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""

    chat_model: str = Field(default=CHAT_MODEL_NAME)
    image_edit_model: str = Field(default=IMAGE_EDIT_MODEL_NAME)
    hd_image_model: str = Field(default=HD_IMAGE_GEN_MODEL_NAME)
    storage_backend: str = Field(default="json", description="memory, json or sqlite")
    storage_path: Path = Field(default=DEFAULT_STORAGE_PATH)
    log_level: str = Field(default="WARNING")


def load_settings() -> Settings:
    """Build settings from environment variables.

    Environment variables:
        BHAII_CHAT_MODEL: Chat model (default: gemini-flash-latest)
        BHAII_IMAGE_EDIT_MODEL: Image edit model (default: gemini-2.5-flash-image)
        BHAII_HD_IMAGE_MODEL: Image generation model (default: imagen-4.0-generate-001)
        BHAII_STORAGE_BACKEND: Preference storage backend (default: json)
        BHAII_STORAGE_PATH: Preference storage file (default: ~/.bhaii_studio/prefs.json)
        BHAII_LOG_LEVEL: Logging level (default: WARNING)
    """
    return Settings(
        chat_model=os.getenv("BHAII_CHAT_MODEL", CHAT_MODEL_NAME),
        image_edit_model=os.getenv("BHAII_IMAGE_EDIT_MODEL", IMAGE_EDIT_MODEL_NAME),
        hd_image_model=os.getenv("BHAII_HD_IMAGE_MODEL", HD_IMAGE_GEN_MODEL_NAME),
        storage_backend=os.getenv("BHAII_STORAGE_BACKEND", "json"),
        storage_path=Path(os.getenv("BHAII_STORAGE_PATH", str(DEFAULT_STORAGE_PATH))).expanduser(),
        log_level=os.getenv("BHAII_LOG_LEVEL", "WARNING").upper(),
    )
