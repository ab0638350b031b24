from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

def success_response(data: Any, status_code: int = 200):
    return JSONResponse(
        content={"success": True, "data": jsonable_encoder(data), "error": None},
        status_code=status_code
    )

def error_response(message: str, status_code: int = 500):
    return JSONResponse(
        content={"success": False, "data": None, "error": message},
        status_code=status_code
    )
