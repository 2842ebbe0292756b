from config.installer_config import InstallerConfig
from installer.parser import as_dom
from installer.upload_form.form_analyzer import FileField, FormSnapshot
from installer.upload_form.form_submitter import (
    ThemePayload,
    UploadResultInterpreter,
    UploadSubmitter,
    resolve_activation_url,
)

from tests.conftest import (
    FAILED_PAGE,
    INSTALLED_PAGE,
    NO_BUTTON_PAGE,
    SECOND_SELECTOR_PAGE,
    UPLOAD_PATH,
    FakeAdminClient,
)


def _interpreter() -> UploadResultInterpreter:
    return UploadResultInterpreter(
        InstallerConfig.MESSAGE_REGION_SELECTOR,
        InstallerConfig.FAILURE_PHRASE,
        InstallerConfig.ACTIVATION_SELECTORS,
    )


def test_build_request_replaces_only_the_file_field(payload) -> None:
    snapshot = FormSnapshot([
        ('_wpnonce', 'f00dcafe'),
        ('themezip', FileField()),
        ('_wp_http_referer', '/wp-admin/theme-install.php'),
        ('extra', 'kept as is'),
    ])
    submitter = UploadSubmitter(FakeAdminClient({}), UPLOAD_PATH, 'themezip')

    fields, files = submitter.build_request(snapshot, payload)

    assert fields == [
        ('_wpnonce', 'f00dcafe'),
        ('_wp_http_referer', '/wp-admin/theme-install.php'),
        ('extra', 'kept as is'),
    ]
    assert files == {'themezip': ('twentyfoo.zip', b"PK\x03\x04fake-theme", 'application/zip')}


def test_submit_posts_multipart_to_endpoint(payload) -> None:
    client = FakeAdminClient({UPLOAD_PATH: INSTALLED_PAGE})
    snapshot = FormSnapshot([('_wpnonce', 'n'), ('themezip', FileField())])

    step = UploadSubmitter(client, UPLOAD_PATH, 'themezip').submit(snapshot, payload)

    assert step.is_ok
    assert step.value.select_one('.activatelink') is not None
    method, url, fields, files = client.calls[0]
    assert (method, url) == ('POST', UPLOAD_PATH)
    assert fields == [('_wpnonce', 'n')]
    assert list(files) == ['themezip']


def test_find_failure_reads_message_region() -> None:
    interpreter = _interpreter()

    failure = interpreter.find_failure(as_dom(FAILED_PAGE))

    assert failure is not None
    assert 'Theme installation failed.' in failure
    assert 'style.css' in failure
    assert interpreter.find_failure(as_dom(INSTALLED_PAGE)) is None


def test_failure_phrase_outside_message_region_is_ignored() -> None:
    page = as_dom("<html><body><p>Theme installation failed.</p><div id='wpbody-content'><div class='wrap'>ok</div></div></body></html>")

    assert _interpreter().find_failure(page) is None


def test_first_selector_wins_over_document_order() -> None:
    href = _interpreter().find_activation_link(as_dom(INSTALLED_PAGE))

    assert href == "theme-install.php?action=activate&template=foo&_wpnonce=abc"


def test_falls_back_to_second_selector() -> None:
    href = _interpreter().find_activation_link(as_dom(SECOND_SELECTOR_PAGE))

    assert href == "themes.php?action=activate&stylesheet=foo&_wpnonce=xyz"


def test_no_activation_link() -> None:
    assert _interpreter().find_activation_link(as_dom(NO_BUTTON_PAGE)) is None


def test_resolve_relative_activation_link() -> None:
    url = resolve_activation_url(
        "theme-install.php?action=activate&template=foo&_wpnonce=abc",
        "https://example.org/wp-admin/",
    )

    assert url == "https://example.org/wp-admin/theme-install.php?action=activate&template=foo&_wpnonce=abc"


def test_resolve_keeps_absolute_links_and_scoped_bases() -> None:
    assert resolve_activation_url("https://other.test/x", "https://example.org/wp-admin/") == "https://other.test/x"
    assert (
        resolve_activation_url("themes.php?a=1", "https://play.test/scope:0.42/wp-admin/")
        == "https://play.test/scope:0.42/wp-admin/themes.php?a=1"
    )


def test_payload_from_path(tmp_path) -> None:
    zip_path = tmp_path / "my-theme.zip"
    zip_path.write_bytes(b"PK")

    payload = ThemePayload.from_path(str(zip_path))

    assert payload.name == "my-theme.zip"
    assert payload.as_upload() == ("my-theme.zip", b"PK", "application/zip")
