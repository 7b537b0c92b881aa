import logging
import os
import posixpath
import stat
from urllib.parse import quote

from flask import Flask, request, render_template_string, send_file, abort
from werkzeug.routing import Rule
from werkzeug.security import safe_join

import config

logger = logging.getLogger(__name__)

# Directory listing fragment. Entry names and the path are autoescaped.
LISTING_TEMPLATE = (
    "<h1>Index of {{ url_path }}</h1><ul>"
    "{% for href, name in entries %}"
    "<li><a href=\"{{ href }}\">{{ name }}</a></li>"
    "{% endfor %}"
    "</ul>"
)

ABOUT_TEMPLATE = """
<html>
<head>
    <title>About This Server</title>
</head>
<body>
    <h1>About This Server</h1>
    <p>This is a simple file server written in Python. It serves files from the current directory and allows users to browse and view text files via a web browser.</p>
    <h2>Features:</h2>
    <ul>
        <li>Lists files and directories in the current directory.</li>
        <li>Allows users to view the content of text files directly in the browser.</li>
        <li>Accessible via local network IP as well as localhost.</li>
    </ul>
    <h2>How to Access:</h2>
    <p>You can access the server using the following URLs:</p>
    <ul>
        <li><a href="http://{{ localhost }}">http://{{ localhost }}</a> (Localhost)</li>
        <li><a href="http://{{ local_ip }}">http://{{ local_ip }}</a> (LAN IP)</li>
    </ul>
    <p>Replace <code>LAN IP</code> with the actual IP address provided above.</p>
</body>
</html>
"""


def list_directory(fs_path, url_path):
    """
    Returns (href, name) pairs for the immediate children of fs_path, sorted
    by their raw bytes.

    Hrefs percent-quote the raw name bytes. Display names are decoded as
    UTF-8 with undecodable bytes replaced.
    """
    with os.scandir(fs_path) as it:
        raw_names = sorted(os.fsencode(entry.name) for entry in it)
    base = quote(url_path)
    return [
        (posixpath.join(base, quote(raw)), raw.decode("utf-8", "replace"))
        for raw in raw_names
    ]


def create_app(local_ip, root=config.SERVE_ROOT):
    """
    Builds the file browser application.

    local_ip is resolved once before the app exists and is only read by the
    /about view. root is joined with the URL path on every request.
    """
    app = Flask(__name__)

    def browse(path):
        """Lists a directory or streams a file, based on what the URL path maps to."""
        url_path = request.path
        fs_path = safe_join(root, path)
        if fs_path is None:
            logger.debug(f"Rejected path outside the served root: {url_path}")
            abort(404)

        try:
            info = os.stat(fs_path)
        except (OSError, ValueError) as e:
            logger.debug(f"Stat failed for {fs_path}: {e}")
            abort(404)

        if not stat.S_ISDIR(info.st_mode):
            try:
                return send_file(os.path.abspath(fs_path), conditional=True)
            except PermissionError as e:
                logger.debug(f"Unable to open {fs_path}: {e}")
                abort(403)

        try:
            entries = list_directory(fs_path, url_path)
        except OSError as e:
            logger.error(f"Unable to read directory {fs_path}: {e}")
            return "Unable to read directory\n", 500, {"Content-Type": "text/plain; charset=utf-8"}

        return render_template_string(LISTING_TEMPLATE, url_path=url_path, entries=entries)

    def about():
        """Serves the about page with the LAN address filled in."""
        return render_template_string(ABOUT_TEMPLATE, localhost=config.LOCALHOST, local_ip=local_ip)

    # Rules without a methods list match every HTTP method, standard or not.
    app.url_map.add(Rule('/', defaults={'path': ''}, endpoint='browse'))
    app.url_map.add(Rule('/<path:path>', endpoint='browse'))
    app.url_map.add(Rule('/about', endpoint='about'))
    app.view_functions['browse'] = browse
    app.view_functions['about'] = about

    return app
