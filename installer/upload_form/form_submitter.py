# -*- coding: utf-8 -*-
"""
Upload Form Submitter
Replays the captured upload form with a theme zip and interprets the result page
"""

import logging
import os
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urljoin
from bs4 import BeautifulSoup

from installer.fetcher import AdminClient, transport_step
from installer.parser import element_text, select_first
from installer.results import StepResult
from installer.upload_form.form_analyzer import FormSnapshot


logger = logging.getLogger(__name__)


class ThemePayload:
    """A theme zip to upload, plus the name it is reported under."""

    def __init__(self, name: str, content: bytes, content_type: str = 'application/zip'):
        self.name = name
        self.content = content
        self.content_type = content_type

    @classmethod
    def from_path(cls, path: str) -> 'ThemePayload':
        with open(path, 'rb') as f:
            return cls(os.path.basename(path), f.read())

    def as_upload(self) -> Tuple[str, bytes, str]:
        """File part in the (filename, content, content_type) form requests expects."""
        return self.name, self.content, self.content_type

    def __repr__(self) -> str:
        return f"ThemePayload({self.name!r}, {len(self.content)} bytes)"


# ============================================================================
# SUBMISSION
# ============================================================================

class UploadSubmitter:
    """Sends a form snapshot with its file field replaced by the payload."""

    def __init__(self, client: AdminClient, endpoint: str, file_field: str, method: str = 'POST'):
        self.client = client
        self.endpoint = endpoint
        self.file_field = file_field
        self.method = method

    def build_request(self, snapshot: FormSnapshot, payload: ThemePayload) -> Tuple[List[Tuple[str, str]], dict]:
        """
        Build the multipart parts for an upload.

        Every captured entry except the file field is forwarded unchanged and
        in order; the payload is bound under the file field's name.

        Returns:
            Tuple of (field pairs, files mapping)
        """
        return snapshot.substitute(self.file_field, payload).to_request_parts()

    def submit(self, snapshot: FormSnapshot, payload: ThemePayload) -> StepResult:
        """
        Upload the payload.

        Returns:
            StepResult with the parsed result page, or failed TRANSPORT_ERROR
        """
        fields, files = self.build_request(snapshot, payload)
        logger.info(f"Submitting {payload.name} to: {self.endpoint}")
        logger.debug(f"  - Forwarded fields: {', '.join(name for name, _ in fields)}")
        return transport_step(self.client.submit, self.endpoint, self.method, fields, files)


# ============================================================================
# RESULT INTERPRETATION
# ============================================================================

class UploadResultInterpreter:
    """Reads the page WordPress renders after an upload."""

    def __init__(self, message_selector: str, failure_phrase: str, activation_selectors: Sequence[str]):
        self.message_selector = message_selector
        self.failure_phrase = failure_phrase
        self.activation_selectors = list(activation_selectors)

    def find_failure(self, page: BeautifulSoup) -> Optional[str]:
        """
        Look for the failure phrase in the message region.

        Returns:
            The message region's text when it reports a failure, else None
        """
        message = element_text(page.select_one(self.message_selector))
        if self.failure_phrase in message:
            return message.strip()
        return None

    def find_activation_link(self, page: BeautifulSoup) -> Optional[str]:
        """
        Find the activation link, trying each selector in order.

        Returns:
            The link's href, or None when no selector matches
        """
        button = select_first(page, self.activation_selectors)
        if button is None:
            return None
        return button.get('href')


def resolve_activation_url(href: str, base_url: str) -> str:
    """Resolve a possibly relative activation link against the admin base URL."""
    return urljoin(base_url, href)
