from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

TEMPLATE = "<head-start>A</head-start><head-end>B</head-end><body-start>C</body-start><body-end>D</body-end>"
INDEX = (
    '<!doctype html><html><head><base href="/"><!-- inject:cordova-csp -->'
    "<!-- inject:cordova-script --></head><body><app-root></app-root></body></html>"
)


def _env() -> dict:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT)
    for k in ("CORDOVA_INJECT_SOURCE", "CORDOVA_INJECT_TEMPLATE", "CORDOVA_INJECT_CONFIG"):
        env.pop(k, None)
    return env


def _run(args: list[str]) -> subprocess.CompletedProcess:
    cmd = [sys.executable, "-m", "cordova_inject.cli", *args]
    return subprocess.run(cmd, cwd=str(REPO_ROOT), env=_env(), capture_output=True, text=True)


class TestCliContract(unittest.TestCase):
    def _www(self, td: Path) -> Path:
        www = td / "www"
        (www / "assets").mkdir(parents=True)
        (www / "index.html").write_text(INDEX, encoding="utf-8")
        (www / "assets" / "main.js").write_bytes(b"console.log('<head>');\n")
        (td / "shell.inject").write_text(TEMPLATE, encoding="utf-8")
        return www

    def test_in_place_rewrites_html_only(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            www = self._www(td)
            p = _run(["--www", str(www), "--template", str(td / "shell.inject"), "--connect-src", "https://api.example.com"])
            self.assertEqual(p.returncode, 0, p.stdout + p.stderr)
            self.assertIn("[cordova-inject] OK: 1 html file(s)", p.stdout)
            self.assertIn("inject-cordova-trigger", p.stderr)
            self.assertIn("inject-cordova-index", p.stderr)

            html = (www / "index.html").read_text(encoding="utf-8")
            self.assertTrue(html.startswith('<!doctype html><html><head>A<meta http-equiv="Content-Security-Policy"'))
            self.assertIn("connect-src self: file: https://api.example.com;", html)
            self.assertIn('<script src="cordova.js" async></script>B</head>', html)
            self.assertIn("<body>C<app-root></app-root>D</body>", html)
            self.assertNotIn("<base", html)
            self.assertEqual((www / "assets" / "main.js").read_bytes(), b"console.log('<head>');\n")

    def test_out_dir_mirrors_tree_and_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            www = self._www(td)
            cfg = td / "inject.json"
            cfg.write_text(json.dumps({"template": "shell.inject", "source": "http://localhost:8080"}), encoding="utf-8")
            out = td / "platform_www"

            p = _run(["--www", str(www), "--out", str(out), "--config", str(cfg), "--quiet"])
            self.assertEqual(p.returncode, 0, p.stdout + p.stderr)
            self.assertNotIn("all files", p.stderr)

            self.assertEqual((www / "index.html").read_text(encoding="utf-8"), INDEX)
            html = (out / "index.html").read_text(encoding="utf-8")
            self.assertIn("connect-src self: http://localhost:8080;", html)
            self.assertEqual((out / "assets" / "main.js").read_bytes(), b"console.log('<head>');\n")

    def test_bad_template_fails_before_writing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            www = self._www(td)
            (td / "shell.inject").write_text("<head-start>A</head-start>", encoding="utf-8")
            p = _run(["--www", str(www), "--template", str(td / "shell.inject")])
            self.assertEqual(p.returncode, 2)
            self.assertIn("[cordova-inject] ERROR: Bad injection file", p.stderr)
            self.assertIn(str(td / "shell.inject"), p.stderr)
            self.assertEqual((www / "index.html").read_text(encoding="utf-8"), INDEX)

    def test_missing_www(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = _run(["--www", str(Path(td) / "nope")])
            self.assertEqual(p.returncode, 2)
            self.assertIn("Missing www folder", p.stderr)


if __name__ == "__main__":
    unittest.main(verbosity=2)
