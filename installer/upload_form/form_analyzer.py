# -*- coding: utf-8 -*-
"""
Form Analyzer Module
Locates the upload form on an admin page and snapshots its current fields
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from bs4 import BeautifulSoup
from bs4.element import Tag

from installer.results import Outcome, StepResult

logger = logging.getLogger(__name__)


class FileField:
    """Placeholder for a file input captured from the live form (always empty)."""

    def __init__(self, filename: str = ''):
        self.filename = filename

    def __eq__(self, other) -> bool:
        return isinstance(other, FileField) and other.filename == self.filename

    def __repr__(self) -> str:
        return f"FileField({self.filename!r})"


class FormSnapshot:
    """
    Ordered name/value state of a form at one point in time.

    Entries keep document order and duplicate names. Every operation returns
    a new snapshot; values are never rewritten.
    """

    def __init__(self, entries: Iterable[Tuple[str, Any]] = ()):
        self._entries: List[Tuple[str, Any]] = list(entries)

    @property
    def entries(self) -> List[Tuple[str, Any]]:
        return list(self._entries)

    def names(self) -> List[str]:
        return [name for name, _ in self._entries]

    def get(self, name: str, default: Any = None) -> Any:
        for entry_name, value in self._entries:
            if entry_name == name:
                return value
        return default

    def without(self, name: str) -> 'FormSnapshot':
        return FormSnapshot((n, v) for n, v in self._entries if n != name)

    def substitute(self, name: str, value: Any) -> 'FormSnapshot':
        return substitute_field(self, name, (name, value))

    def to_request_parts(self) -> Tuple[List[Tuple[str, str]], Dict[str, Any]]:
        """
        Split into plain fields and file parts for a multipart request.

        Returns:
            Tuple of (field pairs, files mapping)
        """
        fields = []
        files = {}
        for name, value in self._entries:
            if isinstance(value, str):
                fields.append((name, value))
            elif isinstance(value, FileField):
                files[name] = (value.filename, b'')
            elif hasattr(value, 'as_upload'):
                files[name] = value.as_upload()
            else:
                fields.append((name, str(value)))
        return fields, files

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self.names()

    def __eq__(self, other) -> bool:
        return isinstance(other, FormSnapshot) and other._entries == self._entries

    def __repr__(self) -> str:
        return f"FormSnapshot({self._entries!r})"


def substitute_field(snapshot: FormSnapshot, excluded_key: str, new_entry: Tuple[str, Any]) -> FormSnapshot:
    """Drop every entry named excluded_key and append new_entry."""
    return FormSnapshot(snapshot.without(excluded_key).entries + [new_entry])


class FormAnalyzer:
    """Finds a form by structural selector and captures its fields like a browser would."""

    # Never part of a form data set unless they are the submitter
    SKIPPED_INPUT_TYPES = {'submit', 'image', 'button', 'reset'}

    def __init__(self, form_selector: str):
        self.form_selector = form_selector

    def locate_form(self, page: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
        return page.select_one(self.form_selector)

    def analyze(self, page: Union[BeautifulSoup, Tag]) -> StepResult:
        """
        Snapshot the form matched by the selector.

        Args:
            page: Parsed admin page

        Returns:
            StepResult with a FormSnapshot, or failed UPLOAD_FORM_MISSING
        """
        form = self.locate_form(page)
        if form is None:
            reason = f"The upload form ({self.form_selector}) was not found."
            logger.warning(reason)
            return StepResult.failed(Outcome.UPLOAD_FORM_MISSING, reason)

        snapshot = self.snapshot(form)
        logger.info(f"Form snapshot: {len(snapshot)} field(s)")
        logger.debug(f"  - Fields: {', '.join(snapshot.names())}")
        return StepResult.ok(snapshot)

    def snapshot(self, form: Tag) -> FormSnapshot:
        """Capture the current field values of a form element."""
        entries = []
        for field_elem in form.find_all(['input', 'select', 'textarea']):
            field_name = field_elem.get('name', '')

            # Skip if no name
            if not field_name or self._is_disabled(field_elem, form):
                continue

            if field_elem.name == 'select':
                for value in self._selected_options(field_elem):
                    entries.append((field_name, value))
                continue

            if field_elem.name == 'textarea':
                text = field_elem.get_text()
                # The parser keeps the newline that browsers drop after <textarea>
                if text.startswith('\r\n'):
                    text = text[2:]
                elif text.startswith('\n'):
                    text = text[1:]
                entries.append((field_name, text))
                continue

            field_type = field_elem.get('type', 'text').lower()
            if field_type in self.SKIPPED_INPUT_TYPES:
                logger.debug(f"Skipping {field_type} field: {field_name}")
                continue
            if field_type in ('checkbox', 'radio'):
                if field_elem.has_attr('checked'):
                    entries.append((field_name, field_elem.get('value', 'on')))
                continue
            if field_type == 'file':
                entries.append((field_name, FileField()))
                continue

            entries.append((field_name, field_elem.get('value', '')))

        return FormSnapshot(entries)

    def _is_disabled(self, field_elem: Tag, form: Tag) -> bool:
        if field_elem.has_attr('disabled'):
            return True
        for parent in field_elem.parents:
            if parent is form:
                break
            if parent.name == 'fieldset' and parent.has_attr('disabled'):
                return True
        return False

    def _selected_options(self, select: Tag) -> List[str]:
        options = select.find_all('option')
        selected = [o for o in options if o.has_attr('selected') and not o.has_attr('disabled')]
        if not selected and options and not select.has_attr('multiple'):
            selected = [options[0]]
        return [o.get('value', o.get_text().strip()) for o in selected]
