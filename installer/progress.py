"""
Progress reporting
Best-effort caption sink used to narrate what the installer is doing.
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Keeps the current caption and forwards it to an optional callback."""

    def __init__(self, on_caption: Optional[Callable[[str], None]] = None):
        self.on_caption = on_caption
        self.caption: Optional[str] = None

    def set_caption(self, caption: str):
        self.caption = caption
        logger.info(caption)

        if self.on_caption is None:
            return
        try:
            self.on_caption(caption)
        except Exception as e:
            # Status reporting must never interrupt an install
            logger.warning(f"Progress callback failed: {e}")
