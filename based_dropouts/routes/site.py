"""
Static site route.

Catch-all that serves the page, its stylesheet, script and images. Include
this router last so API routes take precedence.
"""

from fastapi import APIRouter, Depends, Request, Response

from based_dropouts.services.static_files import StaticFileServer

router = APIRouter(tags=["site"])


def get_file_server(request: Request) -> StaticFileServer:
    """File server attached to the running application."""
    return request.app.state.file_server


@router.get("/{request_path:path}", include_in_schema=False)
def serve_file(request_path: str, file_server: StaticFileServer = Depends(get_file_server)):
    """Serve a file under the site root; ``/`` serves the index document."""
    result = file_server.read(request_path)
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.content_type,
    )
