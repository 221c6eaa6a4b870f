from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/helloWorld", response_class=PlainTextResponse)
async def hello_world():
    """Liveness check."""
    return PlainTextResponse("OK")
