# File: code_scout/source.py
"""code_scout.source: Page data collaborators.

A :class:`PageSource` hands out the custom code of "the current page": the
page explicitly requested by id, or else the one flagged ``selected`` in the
host's page listing.  The listing looks like::

    {"pages": [
        {"id": "home", "name": "Home", "selected": true,
         "customCode": {"head": "<script src=…>", "body": ""}}
    ]}

(a bare list of pages is accepted too).  Missing fragments become ``""``.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union, runtime_checkable

import yaml
from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from code_scout.exceptions import FetchFailed
from code_scout.logger import logger

__all__ = (
    "PageCustomCode",
    "PageRecord",
    "PageSource",
    "FilePageSource",
    "HttpPageSource",
    "StaticPageSource",
    "parse_pages",
    "select_page",
)


@dataclass(frozen=True, slots=True)
class PageCustomCode:
    """Head and body custom code of one page."""

    page_id: str
    name: str
    head: str = ""
    body: str = ""


class CustomCode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    head: str = ""
    body: str = ""

    @field_validator("head", "body", mode="before")
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class PageRecord(BaseModel):
    """One entry of the host page listing."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    title: str = ""
    selected: bool = False
    custom_code: CustomCode = Field(default_factory=CustomCode, alias="customCode")

    @field_validator("id", mode="before")
    def _coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("custom_code", mode="before")
    def _none_to_default(cls, v: Any) -> Any:
        return {} if v is None else v

    def to_custom_code(self) -> PageCustomCode:
        return PageCustomCode(
            page_id=self.id,
            name=self.name or self.title or self.id,
            head=self.custom_code.head,
            body=self.custom_code.body,
        )


def parse_pages(payload: Any) -> List[PageRecord]:
    """Validate a page listing; raises :class:`ValueError` on a wrong shape."""
    if isinstance(payload, dict):
        payload = payload.get("pages")
    if not isinstance(payload, list):
        raise ValueError(f"Page listing must be a list of pages, got {type(payload).__name__}")
    try:
        return [PageRecord.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise ValueError(f"Invalid page entry: {exc}") from exc


def select_page(pages: List[PageRecord], page_id: Optional[str] = None) -> Optional[PageRecord]:
    """Page with *page_id*, or the first selected one when no id is given."""
    for page in pages:
        if page_id is not None and page.id == page_id:
            return page
        if page_id is None and page.selected:
            return page
    return None


@runtime_checkable
class PageSource(Protocol):
    """Anything able to deliver the custom code of the current page."""

    async def fetch_current_page(self) -> Optional[PageCustomCode]:
        ...


class FilePageSource:
    """Page listing exported to a JSON or YAML file."""

    def __init__(self, path: Union[str, Path], page_id: Optional[str] = None) -> None:
        self.path = Path(path)
        self.page_id = page_id

    def _read(self) -> Any:
        text = self.path.read_text(encoding="utf-8")
        if self.path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(text)
        return json.loads(text)

    async def fetch_current_page(self) -> Optional[PageCustomCode]:
        try:
            payload = await asyncio.to_thread(self._read)
            pages = parse_pages(payload)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.error("Reading page listing %s failed: %s", self.path, exc)
            raise FetchFailed(str(self.path), str(exc)) from exc

        page = select_page(pages, self.page_id)
        logger.debug("Loaded %d page(s) from %s", len(pages), self.path)
        return page.to_custom_code() if page else None


class HttpPageSource:
    """Page listing served as JSON over HTTP."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        user_agent: str = "CodeScout/1.0",
        page_id: Optional[str] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.page_id = page_id

    async def fetch_current_page(self) -> Optional[PageCustomCode]:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            async with ClientSession(
                timeout=ClientTimeout(total=self.timeout), headers=headers
            ) as session:
                async with session.get(self.url) as resp:
                    resp.raise_for_status()
                    payload = await resp.json(content_type=None)
            pages = parse_pages(payload)
        except asyncio.TimeoutError as exc:
            logger.error("Page listing %s timed out after %s s", self.url, self.timeout)
            raise FetchFailed(self.url, f"timed out after {self.timeout} seconds") from exc
        except (ClientError, ValueError) as exc:
            logger.error("Fetching page listing %s failed: %s", self.url, exc)
            raise FetchFailed(self.url, str(exc)) from exc

        page = select_page(pages, self.page_id)
        return page.to_custom_code() if page else None


class StaticPageSource:
    """Fragments already at hand, e.g. read from a file or stdin."""

    def __init__(self, head: str = "", body: str = "", *, page_id: str = "fragment",
                 name: str = "Fragment") -> None:
        self._page = PageCustomCode(page_id=page_id, name=name, head=head, body=body)

    async def fetch_current_page(self) -> Optional[PageCustomCode]:
        return self._page
