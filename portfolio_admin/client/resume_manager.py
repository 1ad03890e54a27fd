"""Admin-side resume workflow.

Pick a PDF, encode it without blocking the event loop, upload it, and keep a
local copy of the resume list that is only ever replaced by a fresh fetch.
"""
from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional, Union

import httpx

from portfolio_admin.exceptions import InvalidTypeError, ReadError
from portfolio_admin.services import transfer_codec

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this resume?"


@dataclass(frozen=True)
class Encoded:
    file_name: str
    file_data: str


@dataclass(frozen=True)
class EncodeFailed:
    file_name: str
    reason: Literal["invalid_type", "read_error"]
    message: str


EncodeResult = Union[Encoded, EncodeFailed]


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReadError("Failed to process file.", cause=e) from e


async def encode_file(path: Union[str, Path], content_type: Optional[str] = None) -> EncodeResult:
    """Encode a local file as a data URL.

    The declared type (``content_type`` or a guess from the extension) is
    checked before the file is opened. The read itself runs in a worker
    thread.
    """
    path = Path(path)
    declared = content_type or mimetypes.guess_type(path.name)[0]
    try:
        media_type = transfer_codec.check_media_type(declared)
    except InvalidTypeError as e:
        return EncodeFailed(path.name, "invalid_type", e.message)

    try:
        data = await asyncio.to_thread(_read_bytes, path)
    except ReadError as e:
        logger.warning("Reading %s failed: %s", path, e.cause)
        return EncodeFailed(path.name, "read_error", e.message)
    return Encoded(path.name, transfer_codec.encode(data, media_type))


class ResumeManager:
    """State behind the admin "Resume Management" section.

    ``confirm`` is asked before every delete and must return True for the
    request to be sent. Without one, deletes are refused.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        base_path: str = "/api",
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        self._http = http
        self._base = base_path.rstrip("/")
        self._confirm = confirm or (lambda _prompt: False)
        self._encode_task: Optional[asyncio.Task] = None

        self.resumes: list[dict] = []
        self.is_loading = False
        self.is_processing_file = False
        self.pending: Optional[Encoded] = None
        self.pending_file_name = ""
        self.errors: dict[str, str] = {}

    @property
    def active_resume(self) -> Optional[dict]:
        return next((r for r in self.resumes if r.get("isActive")), None)

    async def refresh(self) -> list[dict]:
        self.is_loading = True
        try:
            response = await self._http.get(f"{self._base}/resumes")
            response.raise_for_status()
            self.resumes = response.json() or []
            self.errors.pop("list", None)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: a 2xx whose body is not JSON (e.g. a proxy error page)
            logger.error("Fetch resumes failed: %s", e)
            self.errors["list"] = "Could not load resumes."
        finally:
            self.is_loading = False
        return self.resumes

    def select_file(self, path: Union[str, Path], content_type: Optional[str] = None) -> asyncio.Task:
        """Start encoding ``path``; any encode still running is cancelled."""
        self.cancel()
        self._encode_task = asyncio.create_task(encode_file(path, content_type))
        self.is_processing_file = True
        return self._encode_task

    async def choose_file(
        self, path: Union[str, Path], content_type: Optional[str] = None
    ) -> Optional[EncodeResult]:
        """Encode ``path`` into the pending upload.

        Returns None when the encode was superseded or cancelled. A failed
        encode records an inline error and keeps the previous pending file.
        """
        task = self.select_file(path, content_type)
        try:
            result = await task
        except asyncio.CancelledError:
            if self._encode_task is task:
                # we were cancelled ourselves, not superseded
                self.cancel()
                raise
            return None

        if self._encode_task is not task:
            return None
        self._encode_task = None
        self.is_processing_file = False

        if isinstance(result, Encoded):
            self.pending = result
            self.pending_file_name = result.file_name
            self.errors.pop("upload", None)
        else:
            self.errors["upload"] = result.message
        return result

    def cancel(self) -> None:
        task, self._encode_task = self._encode_task, None
        if task is not None and not task.done():
            task.cancel()
        self.is_processing_file = False

    async def upload(self, is_active: bool = False) -> bool:
        if self.pending is None:
            self.errors["upload"] = "Please select a file first"
            return False

        try:
            response = await self._http.post(
                f"{self._base}/resumes",
                json={
                    "fileName": self.pending.file_name,
                    "fileData": self.pending.file_data,
                    "isActive": is_active,
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Upload failed: %s", e)
            self.errors["upload"] = "Upload failed. Please try again."
            return False

        self.pending = None
        self.pending_file_name = ""
        self.errors.pop("upload", None)
        await self.refresh()
        return True

    async def toggle_active(self, resume_id: str) -> bool:
        try:
            response = await self._http.patch(f"{self._base}/resumes/{resume_id}/active")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Toggle active error: %s", e)
            self.errors["list"] = "Could not set the primary resume."
            return False
        await self.refresh()
        return True

    async def delete(self, resume_id: str) -> bool:
        if not self._confirm(DELETE_PROMPT):
            return False
        try:
            response = await self._http.delete(f"{self._base}/resumes/{resume_id}")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Delete error: %s", e)
            self.errors["list"] = "Could not delete the resume."
            return False
        await self.refresh()
        return True
