"""Configuration settings for Course Builder."""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logger for this module
logger = logging.getLogger(__name__)

# Base paths
BASE_DIR = Path(__file__).parent.parent
TEMPLATE_DIR = BASE_DIR / "visualizers" / "templates"

# Course metadata defaults
DEFAULT_AUTHOR = os.getenv("COURSE_AUTHOR", "Course Builder")
DEFAULT_SPORT_TYPE = "ride"
SPORT_TYPES = ("ride", "run")

# Time handling
DEFAULT_TIME_MODE = "time"
TIME_MODES = ("time", "duration")

# Rasterization
DEFAULT_RASTER_SECONDS = float(os.getenv("RASTER_SECONDS", "30"))
DEFAULT_RASTER_BASIS = os.getenv("RASTER_BASIS", "source")
RASTER_BASES = ("source", "output")

# Scaled powers are rounded to this many decimals before merging
POWER_PRECISION = 2

# Power column units in course files
POWER_UNITS = ("watts", "fraction")
DEFAULT_POWER_UNIT = "watts"

# File type detection
SUPPORTED_FORMATS = ['.csv', '.txt']
OUTPUT_FORMATS = ['zwo', 'summary']
DEFAULT_OUTPUT_FORMAT = "zwo"

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# User-specific settings (can be overridden via CLI or environment)
DEFAULT_FTP = 250.0  # Functional Threshold Power in watts, read from $FTP by get_ftp()


def get_ftp() -> float:
    """Get the rider's FTP from the environment.

    Returns:
        FTP in watts

    Raises:
        ValueError: If FTP is not a positive number
    """
    raw = os.getenv("FTP", str(DEFAULT_FTP))
    try:
        ftp = float(raw)
    except ValueError:
        raise ValueError(f"FTP must be a number, got {raw!r}")

    if not ftp > 0:
        raise ValueError(f"FTP must be positive, got {raw!r}")

    logger.debug(f"Using FTP {ftp:.0f} W")
    return ftp
