"""Utility functions for loading OpenAPI documents.

This module provides functions for loading OpenAPI documents, JSON or YAML,
from files and URLs with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests
import yaml

from .logging_config import get_logger

logger = get_logger(__name__)

_JSON_SUFFIXES = (".json",)
_YAML_SUFFIXES = (".yaml", ".yml")


class DocumentLoadError(Exception):
    """Custom exception for OpenAPI document loading errors."""

    pass


def parse_document(text: str, json_format: bool) -> dict[str, Any]:
    """Parse document text as JSON or YAML.

    Args:
        text: Raw document text.
        json_format: Parse with the JSON parser instead of YAML.

    Returns:
        Parsed document mapping.

    Raises:
        DocumentLoadError: If the text cannot be parsed or is not a mapping.
    """
    try:
        data = json.loads(text) if json_format else yaml.safe_load(text)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Invalid JSON: {e}") from e
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoadError(
            f"OpenAPI document must be a mapping, got {type(data).__name__}"
        )
    if "openapi" not in data:
        logger.warning("Document has no 'openapi' version field")
    return data


def load_document_from_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from a local file.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.

    Args:
        file_path: Path to the document.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoadError: If file cannot be read or parsed.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load OpenAPI document from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in _JSON_SUFFIXES + _YAML_SUFFIXES:
        logger.warning("Unrecognized extension %r, parsing %s as YAML", suffix, file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e, exc_info=True)
        raise DocumentLoadError(f"Error reading file {file_path}: {e}") from e

    try:
        data = parse_document(text, json_format=suffix in _JSON_SUFFIXES)
    except DocumentLoadError as e:
        logger.error("Cannot parse %s: %s", file_path, e)
        raise DocumentLoadError(f"{file_path}: {e}") from e

    logger.info("Successfully loaded OpenAPI document from %s", file_path)
    return str(file_path), data


def load_document_from_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoadError: If URL is invalid, request fails, or response can't be parsed.
    """
    logger.debug("Attempting to load OpenAPI document from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise DocumentLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise DocumentLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise DocumentLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise DocumentLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e, exc_info=True)
        raise DocumentLoadError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    json_format = "json" in content_type or parsed_url.path.lower().endswith(".json")

    try:
        data = parse_document(response.text, json_format=json_format)
    except DocumentLoadError as e:
        logger.error("Cannot parse response from %s: %s", url, e)
        raise DocumentLoadError(f"Invalid document at {url}: {e}") from e

    logger.info("Successfully loaded OpenAPI document from %s", url)
    return url, data


def load_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, dict[str, Any]]:
    """Load an OpenAPI document from either a file or URL.

    Args:
        file_path: Path to local document (mutually exclusive with url).
        url: URL to fetch the document from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoadError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise DocumentLoadError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise DocumentLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_document_from_file(file_path)
    return load_document_from_url(url, timeout)
