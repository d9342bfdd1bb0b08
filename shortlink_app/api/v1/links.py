from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shortlink_app.dependencies import get_link_service
from shortlink_app.exceptions import ShortenerError
from shortlink_app.schemas.link import DeleteResponse, LinkView, ShortenRequest
from shortlink_app.services.link_service import LinkService

router = APIRouter(tags=["links"])


def _http_error(error: ShortenerError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)


@router.post("/shorten", response_model=LinkView, status_code=status.HTTP_201_CREATED)
def shorten_url(
    body: ShortenRequest,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link, or return the existing one for the same URL"""
    try:
        return link_service.shorten(body.long_url)
    except ShortenerError as e:
        raise _http_error(e)


@router.get("/stats/{short_code}", response_model=LinkView)
def get_link_stats(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get statistics for a short link (does not count as a click)"""
    try:
        return link_service.stats(short_code)
    except ShortenerError as e:
        raise _http_error(e)


@router.get("/urls/all", response_model=List[LinkView])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """List all short links, newest first"""
    return link_service.list_all()


@router.get("/{short_code}")
def redirect_to_long_url(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL.

    The click counter is incremented in the store as part of the lookup.
    """
    try:
        long_url = link_service.resolve(short_code)
    except ShortenerError as e:
        raise _http_error(e)
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)


@router.delete("/{short_code}", response_model=DeleteResponse)
def delete_link(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Delete a short link; deleting an unknown code is not an error"""
    return DeleteResponse(deleted=link_service.delete(short_code))
