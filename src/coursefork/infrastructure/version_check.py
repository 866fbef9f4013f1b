"""Checking whether a newer coursefork release is available."""

import logging
import re

import httpx
from attrs import frozen

from coursefork.core.errors import CourseforkError

logger = logging.getLogger(__name__)


class UpdateCheckError(CourseforkError):
    pass


@frozen
class UpdateStatus:
    installed: str
    latest: str

    @property
    def update_available(self) -> bool:
        return version_key(self.latest) > version_key(self.installed)


def version_key(version: str) -> tuple[int, ...]:
    """Numeric components of a version string ("1.10.0rc1" -> (1, 10, 0))."""
    return tuple(int(part) for part in re.findall(r"\d+", version.split("+")[0])[:3])


def fetch_latest_version(url: str, timeout: float = 5.0) -> str:
    """Fetch the latest released version from a PyPI-style JSON endpoint.

    Raises:
        UpdateCheckError: If the endpoint cannot be reached or returns
            unexpected data
    """
    logger.debug(f"Fetching release metadata from {url}")
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        return str(response.json()["info"]["version"])
    except httpx.HTTPError as e:
        raise UpdateCheckError(f"Could not fetch release metadata from {url}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise UpdateCheckError(f"Unexpected release metadata from {url}: {e}") from e


def check_for_update(installed: str, url: str, timeout: float = 5.0) -> UpdateStatus:
    return UpdateStatus(installed=installed, latest=fetch_latest_version(url, timeout))
