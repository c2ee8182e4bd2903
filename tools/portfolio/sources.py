from __future__ import annotations

import pathlib
from typing import Optional, Union

import requests

from .config import HTTP_TIMEOUT, URL_SCHEME
from .errors import FetchError


class LocalSource:
    """Project files in a directory on disk."""

    def __init__(self, projects_dir: pathlib.Path):
        self.projects_dir = pathlib.Path(projects_dir)

    def fetch(self, name: str) -> str:
        path = self.projects_dir / name
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"cannot read {path}: {e}") from e

    def __repr__(self) -> str:
        return f"LocalSource({str(self.projects_dir)!r})"


class HttpSource:
    """Project files served under a URL, e.g. a deployed site's /projects/."""

    def __init__(
        self,
        base_url: str,
        timeout: float = HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, name: str) -> str:
        url = f"{self.base_url}/{name.lstrip('/')}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"GET {url} failed: {e}") from e
        if not resp.ok:
            raise FetchError(
                f"GET {url} failed: {resp.status_code} {resp.reason}"
            )
        # project files are UTF-8 whatever the Content-Type charset says
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FetchError(f"GET {url}: not UTF-8 ({e})") from e

    def __repr__(self) -> str:
        return f"HttpSource({self.base_url!r})"


Source = Union[LocalSource, HttpSource]


def open_source(location: Union[str, pathlib.Path]) -> Source:
    if URL_SCHEME.match(str(location)):
        return HttpSource(str(location))
    return LocalSource(pathlib.Path(location))
