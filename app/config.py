# app/config.py
import os
from dotenv import load_dotenv
import logging

# Load .env file if present
load_dotenv()

# OpenAI settings
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
LLM_MODEL: str = os.getenv("OPENAI_LLM_MODEL", "gpt-3.5-turbo-0125")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))  # low = stable categories

# Analysis knobs
DEFAULT_INDUSTRY: str = os.getenv("DEFAULT_INDUSTRY", "general retail")  # used when the request names none
FALLBACK_LANGUAGE = "en"


# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)
logger.info(f"Configuration loaded: LLM_MODEL={LLM_MODEL}, LLM_TEMPERATURE={LLM_TEMPERATURE}, DEFAULT_INDUSTRY={DEFAULT_INDUSTRY}")

def get_logger(name: str = __name__) -> logging.Logger:
    return logging.getLogger(name)
