"""
Batch Theme Installer
Uploads one or more theme zips into a WordPress site through wp-admin
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from config.installer_config import InstallerConfig, parse_cookies
from installer.fetcher import AdminClient
from installer.results import InstallResult, InstallState, Outcome
from installer.upload_form.form_submitter import ThemePayload
from services.theme_install_service import ThemeInstallService
from utils.logger import setup_logger

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Install theme zips into a WordPress site via the wp-admin upload form'
    )
    parser.add_argument('zip_files', nargs='+', help='Theme zip file(s) to install')
    parser.add_argument('--site-url', type=str, default=InstallerConfig.SITE_URL,
                        help='Site URL (default: $WP_SITE_URL)')
    parser.add_argument('--cookie', action='append', default=[],
                        help='Session cookie NAME=VALUE of a logged-in admin (repeatable)')
    parser.add_argument('--no-activate', action='store_true', help='Install without activating')
    parser.add_argument('--timeout', type=int, default=InstallerConfig.TIMEOUT,
                        help=f'Request timeout (default: {InstallerConfig.TIMEOUT}s)')
    parser.add_argument('--max-retries', type=int, default=InstallerConfig.MAX_RETRIES,
                        help='Retries for page reads')
    parser.add_argument('--log-file', type=str, help='Also write the log to this file')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser


def collect_cookies(cookie_args: List[str]) -> Dict[str, str]:
    cookies = dict(InstallerConfig.COOKIES)
    for raw in cookie_args:
        cookies.update(parse_cookies(raw))
    return cookies


def print_summary(results: List[InstallResult]):
    """Print install summary."""
    total = len(results)
    succeeded = sum(1 for r in results if r.success)

    print("\n" + "=" * 70)
    print("INSTALL SUMMARY")
    print("=" * 70)
    for result in results:
        status = "OK" if result.success else "FAILED"
        print(f"  [{status}] {result.theme_name}: {result.outcome.value}")
        if result.message:
            print(f"      {result.message}")
    print("-" * 70)
    print(f"Total:      {total}")
    print(f"Succeeded:  {succeeded}")
    print(f"Failed:     {total - succeeded}")
    print("=" * 70)


def main(argv: Optional[List[str]] = None) -> int:
    """Install every zip given on the command line."""
    args = build_parser().parse_args(argv)
    setup_logger(name="install_themes", level=logging.DEBUG if args.verbose else logging.INFO,
                 log_file=args.log_file)

    config = InstallerConfig.with_overrides(
        SITE_URL=args.site_url,
        TIMEOUT=args.timeout,
        MAX_RETRIES=args.max_retries,
        COOKIES=collect_cookies(args.cookie)
    )
    is_valid, error = config.validate()
    if not is_valid:
        logger.error(f"❌ Configuration error: {error} (see --site-url, --timeout, --max-retries)")
        return 2
    if args.verbose:
        config.print_config()

    missing = [path for path in args.zip_files if not Path(path).is_file()]
    if missing:
        logger.error(f"Zip file(s) not found: {', '.join(missing)}")
        return 2

    client = AdminClient(
        config.SITE_URL,
        timeout=config.TIMEOUT,
        max_retries=config.MAX_RETRIES,
        user_agent=config.USER_AGENT,
        cookies=config.COOKIES
    )
    service = ThemeInstallService(client, config=config)

    results = []
    try:
        for i, path in enumerate(args.zip_files, 1):
            logger.info(f"[{i}/{len(args.zip_files)}] {path}")
            try:
                payload = ThemePayload.from_path(path)
            except OSError as e:
                logger.error(f"Proceeding without {Path(path).name}. Could not read the zip: {e}")
                results.append(InstallResult(
                    Path(path).name, Outcome.PAYLOAD_UNREADABLE, InstallState.FAILED, str(e)
                ))
                continue
            results.append(service.install_theme(payload, activate=not args.no_activate))
    finally:
        service.close()

    print_summary(results)
    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
