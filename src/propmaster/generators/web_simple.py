"""``web-simple`` — a static site served by the standard library."""

from __future__ import annotations

from propmaster.generators.base import Generator

_APP = '''\
"""Serve the ``web`` directory of {{ project_name }} on localhost."""

import functools
import http.server
from pathlib import Path

ROOT = Path(__file__).parent / "web"


def main(port=8080):
    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(ROOT))
    with http.server.ThreadingHTTPServer(("127.0.0.1", port), handler) as server:
        print(f"Serving on http://127.0.0.1:{port}")
        server.serve_forever()


if __name__ == "__main__":
    main()
'''

_INDEX = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{{ project_name }}</title>
    <link rel="stylesheet" href="styles.css">
  </head>
  <body>
    <h1>{{ project_name }}</h1>
    <input id="text" placeholder="Type something">
    <p>Reversed: <span id="reversed"></span></p>
    <script src="main.js"></script>
  </body>
</html>
"""

_JS = """\
const input = document.getElementById("text");
const output = document.getElementById("reversed");

input.addEventListener("input", () => {
  output.textContent = input.value.split("").reverse().join("");
});
"""

_CSS = """\
body {
  font-family: sans-serif;
  margin: 2em;
}
"""


class WebSimpleGenerator(Generator):
    id = "web-simple"
    description = (
        "A mobile-friendly web app with a tiny Python development server; "
        "the page reverses whatever text is typed into it."
    )
    entrypoint = "app.py"

    def __init__(self) -> None:
        super().__init__()
        self.add_template("app.py", _APP)
        self.add_template("web/index.html", _INDEX)
        self.add_template("web/main.js", _JS)
        self.add_template("web/styles.css", _CSS)
