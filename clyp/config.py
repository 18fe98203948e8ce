"""Client-wide configuration loader.

Values are read from the environment once, at import time, and exposed
through the module-level ``settings`` singleton.  Every lookup uses the

    os.getenv(KEY) or DEFAULT

idiom so that an exported-but-empty variable (``CLYP_API_URL=""``) falls back
to the default instead of producing an unusable empty base URL.
"""

import os


class Settings:
    """Environment-backed settings for the Clyp client."""

    API_URL: str = os.getenv('CLYP_API_URL') or 'https://api.clyp.it'
    UPLOAD_URL: str = os.getenv('CLYP_UPLOAD_URL') or 'https://upload.clyp.it'
    HTTP_TIMEOUT: float = float(os.getenv('CLYP_HTTP_TIMEOUT') or '60')
    LOG_LEVEL: str = os.getenv('CLYP_LOG_LEVEL') or 'INFO'
    LOG_FILE: str = os.getenv('CLYP_LOG_FILE') or ''

settings = Settings()
