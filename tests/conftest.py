import pytest

from installer.parser import as_dom
from installer.upload_form.form_submitter import ThemePayload


SITE_URL = "https://example.org"
FORM_PAGE_PATH = "/wp-admin/theme-install.php"
UPLOAD_PATH = "/wp-admin/update.php?action=upload-theme"

FORM_PAGE = """
<html><body>
<div id="wpbody-content">
  <div class="upload-theme">
    <p class="install-help">If you have a theme in a .zip format, you may install or update it by uploading it here.</p>
    <form method="post" enctype="multipart/form-data" class="wp-upload-form"
          action="https://example.org/wp-admin/update.php?action=upload-theme">
      <input type="hidden" id="_wpnonce" name="_wpnonce" value="f00dcafe" /><input type="hidden" name="_wp_http_referer" value="/wp-admin/theme-install.php" />
      <label class="screen-reader-text" for="themezip">Theme zip file</label>
      <input type="file" id="themezip" name="themezip" accept=".zip" />
      <input type="submit" name="install-theme-submit" id="install-theme-submit" class="button" value="Install Now" disabled="disabled" />
    </form>
  </div>
</div>
</body></html>
"""

ACTIVATE_HREF = "theme-install.php?action=activate&template=foo&_wpnonce=abc"
ACTIVATE_URL = "https://example.org/wp-admin/theme-install.php?action=activate&template=foo&_wpnonce=abc"

INSTALLED_PAGE = """
<html><body>
<div id="wpbody-content">
  <div class="wrap">
    <h1>Installing theme from uploaded file: twentyfoo.zip</h1>
    <p>Unpacking the package&#8230;</p>
    <p>Installing the theme&#8230;</p>
    <p>Theme installed successfully.</p>
    <div class="update-from-upload-actions">
      <a href="themes.php?action=activate&amp;stylesheet=other&amp;_wpnonce=zzz" class="button button-primary">Activate</a>
    </div>
    <p><a href="/?theme=foo" class="load-customize">Live Preview</a>
       <a href="theme-install.php?action=activate&amp;template=foo&amp;_wpnonce=abc" class="activatelink">Activate</a>
       <a href="themes.php">Go to Themes page</a></p>
  </div>
</div>
</body></html>
"""

SECOND_SELECTOR_PAGE = """
<html><body>
<div id="wpbody-content">
  <div class="wrap">
    <h1>Installing theme from uploaded file: twentyfoo.zip</h1>
    <p>Theme installed successfully.</p>
    <p class="update-from-upload-actions">
      <a class="button button-primary" href="themes.php?action=activate&amp;stylesheet=foo&amp;_wpnonce=xyz">Activate</a>
    </p>
  </div>
</div>
</body></html>
"""

FAILED_PAGE = """
<html><body>
<div id="wpbody-content">
  <div class="wrap">
    <h1>Installing theme from uploaded file: twentyfoo.zip</h1>
    <p>Unpacking the package&#8230;</p>
    <p>The package could not be installed. The theme is missing the style.css stylesheet.</p>
    <p>Theme installation failed.</p>
    <a href="theme-install.php?action=activate&amp;template=foo&amp;_wpnonce=abc" class="activatelink">Activate</a>
  </div>
</div>
</body></html>
"""

NO_BUTTON_PAGE = """
<html><body>
<div id="wpbody-content">
  <div class="wrap">
    <h1>Installing theme from uploaded file: twentyfoo.zip</h1>
    <p>Theme installed successfully.</p>
    <p><a href="themes.php">Go to Themes page</a></p>
  </div>
</div>
</body></html>
"""


class FakeAdminClient:
    """In-memory stand-in for AdminClient that records every call."""

    def __init__(self, pages, site_url=SITE_URL, errors=None):
        self.pages = pages
        self.site_url = site_url
        self.errors = errors or {}
        self.calls = []
        self.closed = False

    def resolve_internal_url(self, path):
        return self.site_url.rstrip('/') + '/' + path.lstrip('/')

    def _respond(self, url):
        if url in self.errors:
            raise self.errors[url]
        return as_dom(self.pages.get(url, "<html><body></body></html>"))

    def fetch_page(self, url):
        self.calls.append(('GET', url, None, None))
        return self._respond(url)

    def submit(self, url, method, fields, files):
        self.calls.append((method, url, fields, files))
        return self._respond(url)

    def close(self):
        self.closed = True

    def requests_to(self, method):
        return [call for call in self.calls if call[0] == method]


@pytest.fixture
def payload():
    return ThemePayload("twentyfoo.zip", b"PK\x03\x04fake-theme")


@pytest.fixture
def make_client():
    def _make(result_page=INSTALLED_PAGE, form_page=FORM_PAGE, **kwargs):
        pages = {FORM_PAGE_PATH: form_page, UPLOAD_PATH: result_page}
        return FakeAdminClient(pages, **kwargs)
    return _make
