"""Schema loading and payload submission boundaries."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from schemaform import logger
from schemaform.exceptions import SchemaLoadError, SubmissionError
from schemaform.settings import build_httpx_client_kwargs
from schemaform.typing.models import SubmissionReceipt

if TYPE_CHECKING:
    from schemaform.settings import Settings


def is_remote_source(source: str) -> bool:
    """Return whether a schema source is an http(s) URL rather than a file path."""
    return urlparse(source).scheme in {"http", "https"}


def _read_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def _fetch_remote(source: str, client: httpx.AsyncClient) -> str:
    try:
        response = await client.get(source)
    except httpx.HTTPError as exc:
        raise SchemaLoadError(source=source, detail=str(exc) or type(exc).__name__) from exc
    if not response.is_success:
        raise SchemaLoadError(source=source, detail=f"HTTP {response.status_code}")
    return response.text


async def fetch_schema_text(
    source: str,
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Read schema text from a local file or an http(s) endpoint.

    Args:
        source (str): File path or URL.
        settings (Settings): Runtime settings used to build the HTTP client.
        client (httpx.AsyncClient | None): Client to reuse instead of a fresh one.

    Raises:
        SchemaLoadError: If the source is unreachable, unreadable or answers with a non-success status.

    Returns:
        str: Raw schema text.
    """
    if not is_remote_source(source):
        try:
            text = await asyncio.to_thread(_read_file, Path(source))
        except (OSError, UnicodeDecodeError) as exc:
            raise SchemaLoadError(source=source, detail=str(exc)) from exc
    elif client is not None:
        text = await _fetch_remote(source, client)
    else:
        async with httpx.AsyncClient(**build_httpx_client_kwargs(settings, target_url=source)) as owned:
            text = await _fetch_remote(source, owned)

    logger.info("Schema loaded", extra={"source": source, "length": len(text)})
    return text


def _receipt_from_response(response: httpx.Response) -> SubmissionReceipt:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return SubmissionReceipt(status_code=response.status_code)
    try:
        return SubmissionReceipt.model_validate({**body, "status_code": response.status_code})
    except ValidationError:
        return SubmissionReceipt(status_code=response.status_code)


async def _post_payload(url: str, payload: dict[str, Any], client: httpx.AsyncClient) -> SubmissionReceipt:
    try:
        response = await client.post(url, json=payload)
    except httpx.HTTPError as exc:
        raise SubmissionError(message=f"Failed to submit form: {str(exc) or type(exc).__name__}") from exc
    if not response.is_success:
        raise SubmissionError(message="Failed to submit form", status_code=response.status_code)
    return _receipt_from_response(response)


async def submit_payload(
    payload: dict[str, Any],
    url: str,
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
) -> SubmissionReceipt:
    """POST the export payload to the submission endpoint.

    The payload is already materialized, so a failed submission can be retried as-is.

    Args:
        payload (dict[str, Any]): Export payload.
        url (str): Submission endpoint.
        settings (Settings): Runtime settings used to build the HTTP client.
        client (httpx.AsyncClient | None): Client to reuse instead of a fresh one.

    Raises:
        SubmissionError: If the endpoint answers with a non-success status or cannot be reached.

    Returns:
        SubmissionReceipt: Endpoint acknowledgement.
    """
    if client is not None:
        receipt = await _post_payload(url, payload, client)
    else:
        async with httpx.AsyncClient(**build_httpx_client_kwargs(settings, target_url=url)) as owned:
            receipt = await _post_payload(url, payload, owned)

    logger.info("Form submitted", extra={"url": url, "status_code": receipt.status_code})
    return receipt


def persist_payload(payload: dict[str, Any], path: Path) -> Path:
    """Write the export payload as indented JSON.

    Args:
        payload (dict[str, Any]): Export payload.
        path (Path): Output path; parent directories are created.

    Returns:
        Path: Written file path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Payload written", extra={"output_path": str(path)})
    return path
