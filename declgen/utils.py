"""Utility functions for loading type manifests and resolving output paths.

This module provides functions for loading JSON from files and URLs with
proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def is_url(location: Union[str, Path]) -> bool:
    """Return True when the location looks like an http(s) URL."""
    return urlparse(str(location)).scheme in ("http", "https")


def load_json_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug(f"Loaded JSON from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load JSON from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
        logger.debug(f"Loaded JSON from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise JSONLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e


def load_json(location: Union[str, Path], timeout: int = 30) -> Tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        location: Local path or http(s) URL.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).
    """
    if not str(location).strip():
        raise JSONLoaderError("A file path or URL must be provided")

    if is_url(location):
        return load_json_from_url(str(location), timeout)
    return load_json_from_file(location)


def resolve_output_path(
    output_path: Union[str, Path],
    output_file_name: str,
    cwd: Optional[Union[str, Path]] = None,
) -> Path:
    """Resolve the absolute path of the generated declarations file.

    Relative output directories are resolved against ``cwd`` (the current
    working directory by default).
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    directory = Path(output_path)
    if not directory.is_absolute():
        directory = base / directory
    return (directory / output_file_name).resolve()
