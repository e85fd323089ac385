"""Diagnostic Routes: delayed reply and %20 replacement.

Invariants:
    - /{seconds} only matches digits; values above 255 are rejected as NOT_FOUND
    - The delay suspends the task (asyncio.sleep), never the worker
    - /re/{text} works on the raw, still percent-encoded segment: only %20 is
      replaced, every other escape is returned as received
"""

import asyncio

from fastapi import APIRouter, Path, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["diagnostics"])

MAX_WAIT_SECONDS = 255


def replace_encoded_spaces(text: str) -> str:
    return text.replace("%20", " ")


def raw_last_segment(request: Request, fallback: str) -> str:
    """Last path segment as sent by the client, before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return fallback
    path = raw_path.split(b"?", 1)[0]
    return path.rsplit(b"/", 1)[-1].decode("utf-8", errors="replace")


@router.get("/{seconds:int}", response_class=PlainTextResponse)
async def wait(seconds: int = Path(ge=0, le=MAX_WAIT_SECONDS)):
    """Reply after sleeping for the requested number of seconds."""
    await asyncio.sleep(seconds)
    return f"I waited {seconds} seconds!"


@router.get("/re/{text}", response_class=PlainTextResponse)
async def replace(text: str, request: Request):
    return replace_encoded_spaces(raw_last_segment(request, text))
