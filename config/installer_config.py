# -*- coding: utf-8 -*-
"""
Installer Configuration
Manages the target site, HTTP settings and the wp-admin HTML contract
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

# ==================== LOAD .ENV FILE ====================
def load_dotenv():
    """Load .env file if exists."""
    env_path = Path(__file__).parent.parent / '.env'
    if env_path.exists():
        with open(env_path, 'r', encoding='utf-8-sig') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))

load_dotenv()
# ========================================================


def parse_cookies(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse 'name=value; name2=value2' into a cookie mapping.

    Args:
        raw: Cookie header style string (may be None or empty)

    Returns:
        Dictionary of cookie name to value
    """
    cookies = {}
    if not raw:
        return cookies
    for part in raw.split(';'):
        if '=' not in part:
            continue
        name, value = part.split('=', 1)
        if name.strip():
            cookies[name.strip()] = value.strip()
    return cookies


class InstallerConfig:
    """Theme installer configuration."""

    # Target site (externally reachable URL, may include a sub-path)
    SITE_URL: Optional[str] = os.getenv('WP_SITE_URL')

    # HTTP
    TIMEOUT: int = int(os.getenv('WP_TIMEOUT', '30'))
    MAX_RETRIES: int = int(os.getenv('WP_MAX_RETRIES', '3'))
    USER_AGENT: str = os.getenv('WP_USER_AGENT', 'ThemeInstaller/1.0')

    # Cookies of an already logged-in admin session
    COOKIES: Dict[str, str] = parse_cookies(os.getenv('WP_COOKIES'))

    # ==================== WP-ADMIN HTML CONTRACT ====================
    # These must match what wp-admin renders exactly.

    ADMIN_PATH = '/wp-admin/'
    THEME_INSTALL_PAGE = '/wp-admin/theme-install.php'
    UPLOAD_ENDPOINT = '/wp-admin/update.php?action=upload-theme'
    UPLOAD_FORM_SELECTOR = '.wp-upload-form'
    FILE_FIELD = 'themezip'

    MESSAGE_REGION_SELECTOR = '#wpbody-content > .wrap'
    FAILURE_PHRASE = 'Theme installation failed.'

    # Tried in order, first match wins
    ACTIVATION_SELECTORS: List[str] = [
        '#wpbody-content .activatelink',
        '.update-from-upload-actions .button.button-primary',
    ]

    @classmethod
    def with_overrides(cls, **overrides) -> type:
        """
        Derive a configuration class with some attributes replaced.

        Args:
            **overrides: Attribute name to value, e.g. TIMEOUT=10

        Returns:
            Subclass of this configuration carrying the overrides
        """
        unknown = [name for name in overrides if not hasattr(cls, name)]
        if unknown:
            raise AttributeError(f"Unknown config attribute(s): {', '.join(unknown)}")
        return type(cls.__name__, (cls,), dict(overrides))

    @classmethod
    def validate(cls) -> tuple[bool, Optional[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not cls.SITE_URL:
            return False, "WP_SITE_URL not set in environment variables"

        if not cls.SITE_URL.startswith(('http://', 'https://')):
            return False, "WP_SITE_URL must start with http:// or https://"

        if cls.TIMEOUT <= 0:
            return False, "WP_TIMEOUT must be > 0"

        if cls.MAX_RETRIES < 0:
            return False, "WP_MAX_RETRIES must be >= 0"

        return True, None

    @classmethod
    def print_config(cls):
        """Print current configuration (hiding cookie values)."""
        print("\n" + "=" * 70)
        print("THEME INSTALLER CONFIGURATION")
        print("=" * 70)
        print(f"Site URL:             {cls.SITE_URL or 'NOT SET'}")
        print(f"Timeout:              {cls.TIMEOUT}s")
        print(f"Max Retries:          {cls.MAX_RETRIES}")
        print(f"User Agent:           {cls.USER_AGENT}")
        print(f"Cookies:              {', '.join(cls.COOKIES) or 'None'}")
        print("=" * 70 + "\n")


# Example .env file content:
"""
WP_SITE_URL=https://example.org
WP_COOKIES=wordpress_logged_in_abc=admin%7C1700000000%7Ctoken
WP_TIMEOUT=30
WP_MAX_RETRIES=3
"""
