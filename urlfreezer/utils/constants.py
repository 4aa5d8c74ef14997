"""
Shared constants used throughout the client.
"""

from typing import Tuple

# Service configuration
DEFAULT_HOST: str = "https://urlfreezer.com"
FETCH_LINKS_PATH: str = "/api/fetch_links_v2"
ALLOWED_SCHEMES: Tuple[str, ...] = ('http', 'https')

# Transport timeout (in seconds), None leaves it to the transport
DEFAULT_TIMEOUT: float = 30.0

# Byte order mark some spreadsheet tools prepend to CSV files
BOM: str = '\ufeff'

# CSV columns
CSV_INPUT_COLUMNS: Tuple[str, ...] = ('page', 'link', 'label')
CSV_OUTPUT_COLUMNS: Tuple[str, ...] = ('page', 'original', 'label', 'link', 'action')

# Environment variables read by the command line tool
ENV_USER_ID: str = 'URLFREEZER_USER_ID'
ENV_HOST: str = 'URLFREEZER_HOST'
ENV_TIMEOUT: str = 'URLFREEZER_TIMEOUT'

MAX_LOG_LENGTH: int = 200  # Maximum URL length in log messages
