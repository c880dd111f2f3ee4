"""
School Survey Backend — Static Assets & Client Shell
======================================================

What:  Serves the built client application and falls back to its shell for
       client-side routes.
How:   GET /{path}:
         1. /api/... paths that reached here are unknown API routes → 404
         2. an existing file under STATIC_DIR → that file
         3. otherwise STATIC_DIR/index.html
         4. no built shell deployed → the server-rendered questionnaire
Security:
    Resolved paths must stay inside STATIC_DIR (no ../ escapes).

This router must be included last; its path pattern matches everything.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse, Response

from school_survey.client.render import render_questionnaire
from school_survey.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Client"])


def resolve_static_file(static_root: Path, requested: str) -> Optional[Path]:
    """
    Map a URL path onto a file under static_root.

    Returns:
        The file path, or None when nothing matches (caller falls back
        to the shell).

    Raises:
        ValidationError: The path resolves outside static_root, or the OS
                         cannot represent it (NUL bytes, over-long names).
    """
    if not requested:
        return None
    root = static_root.resolve()
    try:
        candidate = (root / requested).resolve()
        is_file = candidate.is_relative_to(root) and candidate.is_file()
    except (ValueError, OSError) as e:
        logger.warning("Rejected unusable static path: %s", type(e).__name__)
        raise ValidationError(message="Invalid file path", field="path") from e
    if not candidate.is_relative_to(root):
        raise ValidationError(message="Invalid file path", field="path")
    return candidate if is_file else None


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str, request: Request) -> Response:
    """Static file, client shell, or the rendered questionnaire."""
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError(resource="API route", resource_id=f"/{full_path}")

    settings = request.app.state.settings
    static_root = Path(settings.static_dir)

    asset = resolve_static_file(static_root, full_path)
    if asset is not None:
        return FileResponse(path=str(asset))

    shell = static_root / "index.html"
    if shell.is_file():
        return FileResponse(path=str(shell), media_type="text/html")

    logger.debug("No client shell in %s; rendering questionnaire", static_root)
    return HTMLResponse(
        render_questionnaire(
            search_min_chars=settings.search_min_chars,
            debounce_ms=settings.autocomplete_debounce_ms,
        )
    )
