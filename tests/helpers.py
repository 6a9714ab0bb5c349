from __future__ import annotations

import json
import shlex
import stat
from pathlib import Path
from typing import Any, Mapping

import requests

from bookfromhub.config import AppConfig, GitHubConfig, PandocConfig, RuntimeConfig
from bookfromhub.core import BookService

API_ROOT = "https://api.github.test"
RAW_ROOT = "https://raw.github.test/octo/hello/main"
REPO_URL = "https://github.com/octo/hello"
CONTENTS_URL = f"{API_ROOT}/repos/octo/hello/contents"


def make_response(
    status_code: int = 200,
    body: bytes | str | Any = b"",
    *,
    headers: Mapping[str, str] | None = None,
    url: str = "",
    reason: str | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason or ("OK" if status_code < 400 else "Error")
    response.url = url
    response.encoding = "utf-8"
    if isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers.update(headers or {})
    return response


def listing_entry(name: str, kind: str = "file", *, download: bool = True) -> dict[str, Any]:
    return {
        "name": name,
        "path": name,
        "sha": "0" * 40,
        "size": 10,
        "type": kind,
        "download_url": f"{RAW_ROOT}/{name}" if download else None,
    }


class FakeSession(requests.Session):
    """Session answering GETs from a url -> response/exception table."""

    def __init__(self, routes: Mapping[str, requests.Response | Exception] | None = None) -> None:
        super().__init__()
        self.routes: dict[str, requests.Response | Exception] = dict(routes or {})
        self.calls: list[str] = []
        self.closed = False

    def get(self, url, **kwargs):  # type: ignore[override]
        self.calls.append(url)
        outcome = self.routes.get(url)
        if outcome is None:
            return make_response(404, b"Not Found", url=url, reason="Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        outcome.url = url
        return outcome

    def close(self) -> None:
        self.closed = True
        super().close()


def repo_routes(files: Mapping[str, str], extra_entries: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    entries = [listing_entry(name) for name in files] + list(extra_entries or [])
    routes: dict[str, Any] = {CONTENTS_URL: make_response(200, entries)}
    for name, body in files.items():
        routes[f"{RAW_ROOT}/{name}"] = make_response(200, body)
    return routes


SUCCESS_SCRIPT = """#!/bin/sh
here=$(dirname "$0")
printf '%s\\n' "$@" > "$here/args.txt"
cp "$1" "$here/input.md"
out=""
while [ "$#" -gt 0 ]; do
  if [ "$1" = "-o" ]; then out="$2"; shift; fi
  shift
done
printf '%s' '%PDF-1.4 fake book' > "$out"
"""


def write_script(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / name
    script.write_text(body, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def fake_pandoc(directory: Path) -> Path:
    return write_script(directory, "pandoc", SUCCESS_SCRIPT)


def failing_pandoc(directory: Path, stderr: str, exit_code: int = 1) -> Path:
    body = f"#!/bin/sh\nprintf '%s' {shlex.quote(stderr)} >&2\nexit {exit_code}\n"
    return write_script(directory, "pandoc", body)


def build_config(tmp_path: Path, pandoc: Path | None = None) -> AppConfig:
    work_root = tmp_path / "work"
    work_root.mkdir(exist_ok=True)
    return AppConfig(
        github=GitHubConfig(api_root=API_ROOT),
        pandoc=PandocConfig(binary=str(pandoc or fake_pandoc(tmp_path / "bin"))),
        runtime=RuntimeConfig(temp_root=work_root, run_log=tmp_path / "runs" / "log.jsonl"),
    )


def build_service(config: AppConfig, session: FakeSession, token: str | None = None) -> BookService:
    return BookService(config, token=token, session_factory=lambda: session)


