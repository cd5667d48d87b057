from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.errors import ServiceNotConfiguredError, UpstreamError
from app.services import sportsdata

router = APIRouter(prefix="/sportsdata", tags=["SportsData"])


@router.api_route("/{path:path}", methods=["GET", "POST"])
async def proxy(path: str, request: Request):
    """Relay a SportsData.io NFL API call with the server-side key."""
    try:
        data = await sportsdata.fetch(path, dict(request.query_params), method=request.method)
    except ServiceNotConfiguredError as e:
        return JSONResponse(status_code=500, content={"detail": str(e)})
    except UpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"detail": str(e), "status": e.status_code, "statusText": e.reason},
        )

    return JSONResponse(content=data, headers={"Cache-Control": sportsdata.CACHE_CONTROL})
