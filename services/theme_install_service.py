# -*- coding: utf-8 -*-
"""
Theme Install Service
Installs (and optionally activates) a theme zip through the wp-admin upload
form. Failures are logged and reported, never raised, so a provisioning run
can carry on without the theme.
"""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from config.installer_config import InstallerConfig
from installer.fetcher import AdminClient, transport_step
from installer.progress import ProgressTracker
from installer.results import InstallResult, InstallState, Outcome, StepResult
from installer.upload_form.form_analyzer import FormAnalyzer
from installer.upload_form.form_submitter import (
    ThemePayload,
    UploadResultInterpreter,
    UploadSubmitter,
    resolve_activation_url,
)
from utils.naming import zip_name_to_human_name

logger = logging.getLogger(__name__)


class ThemeInstallService:
    """
    Drives the upload form the way a user would:
    fetch form -> snapshot fields -> upload -> read result -> follow activate link.
    """

    def __init__(
        self,
        client: AdminClient,
        progress: Optional[ProgressTracker] = None,
        config=InstallerConfig
    ):
        """
        Initialize theme install service.

        Args:
            client: Authenticated admin client
            progress: Caption sink for status reporting
            config: Configuration class holding the wp-admin HTML contract
        """
        self.client = client
        self.progress = progress or ProgressTracker()
        self.config = config

        self.analyzer = FormAnalyzer(config.UPLOAD_FORM_SELECTOR)
        self.submitter = UploadSubmitter(client, config.UPLOAD_ENDPOINT, config.FILE_FIELD)
        self.interpreter = UploadResultInterpreter(
            config.MESSAGE_REGION_SELECTOR,
            config.FAILURE_PHRASE,
            config.ACTIVATION_SELECTORS
        )

    def install_theme(self, payload: ThemePayload, activate: bool = True) -> InstallResult:
        """
        Upload a theme zip and activate it if requested. Never raises.

        Args:
            payload: Theme zip and its display name
            activate: Follow the activation link after a successful upload

        Returns:
            InstallResult describing the outcome
        """
        self.progress.set_caption(f"Installing the {zip_name_to_human_name(payload.name)} theme")

        try:
            result = self._install(payload, activate)
        except requests.exceptions.RequestException as e:
            result = InstallResult(payload.name, Outcome.TRANSPORT_ERROR, InstallState.FAILED, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error while installing {payload.name}")
            result = InstallResult(payload.name, Outcome.UNEXPECTED_ERROR, InstallState.FAILED, str(e))

        if result.success:
            logger.info(f"✅ {payload.name}: {result.outcome.value}")
        elif result.installed:
            logger.error(
                f"The {payload.name} theme was installed but could not be activated. "
                f"The original error was: {result.message}"
            )
        else:
            logger.error(
                f"Proceeding without the {payload.name} theme. Could not install it in wp-admin. "
                f"The original error was: {result.message}"
            )
        return result

    def _install(self, payload: ThemePayload, activate: bool) -> InstallResult:
        # Stage 1: acquire the form page
        step = transport_step(self.client.fetch_page, self.config.THEME_INSTALL_PAGE)
        if not step.is_ok:
            return self._failed(payload, step)

        # Stage 2: snapshot the live form
        step = self.analyzer.analyze(step.value)
        if not step.is_ok:
            return self._failed(payload, step)

        # Stage 3: replace the file field and upload
        step = self.submitter.submit(step.value, payload)
        if not step.is_ok:
            return self._failed(payload, step)

        # Stage 4: interpret the result page
        return self._interpret(payload, step.value, activate)

    def _interpret(self, payload: ThemePayload, page: BeautifulSoup, activate: bool) -> InstallResult:
        state = InstallState.UPLOADED
        logger.debug(f"{payload.name}: {state.value}")

        failure = self.interpreter.find_failure(page)
        if failure:
            return InstallResult(payload.name, Outcome.INSTALL_FAILED, InstallState.FAILED, failure)

        if not activate:
            return InstallResult(payload.name, Outcome.SUCCESS_INSTALLED, InstallState.DONE)

        state = InstallState.ACTIVATING
        logger.debug(f"{payload.name}: {state.value}")

        href = self.interpreter.find_activation_link(page)
        if not href:
            return InstallResult(
                payload.name,
                Outcome.ACTIVATION_AFFORDANCE_MISSING,
                InstallState.FAILED,
                'The "activate" button was not found.',
                installed=True
            )

        base_url = self.client.resolve_internal_url(self.config.ADMIN_PATH)
        activation_url = resolve_activation_url(href, base_url)
        logger.info(f"Activating via: {activation_url}")

        step = transport_step(self.client.fetch_page, activation_url)
        if not step.is_ok:
            result = self._failed(payload, step)
            result.activation_url = activation_url
            result.installed = True
            return result

        return InstallResult(
            payload.name,
            Outcome.SUCCESS_ACTIVATED,
            InstallState.DONE,
            activation_url=activation_url
        )

    def _failed(self, payload: ThemePayload, step: StepResult) -> InstallResult:
        return InstallResult(payload.name, step.outcome, InstallState.FAILED, step.reason)

    def close(self):
        """Close the underlying client."""
        self.client.close()
