import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api.common import ALLOWED_HEADERS, error_response
from .api.routes_photo import router as photo_router
from .api.routes_resume_ai import router as resume_ai_router
from .config import cors_origins
from .errors import InvalidRequest, translate

load_dotenv()
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Career Documents Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_methods=["POST", "OPTIONS", "GET"],
    allow_headers=[h.strip() for h in ALLOWED_HEADERS.split(",")],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Keep the uniform {error} body instead of FastAPI's 422 detail list
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
    )
    logger.warning(f"Rejected request to {request.url.path}: {details}")
    return error_response(translate(error=InvalidRequest(f"Invalid request body: {details}")), request)


@app.get("/health")
def health():
    return {"ok": True}


app.include_router(resume_ai_router)
app.include_router(photo_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
