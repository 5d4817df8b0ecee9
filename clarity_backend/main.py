import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clarity_backend import __version__
from clarity_backend.api.analyze import router as analyze_router
from clarity_backend.config import load_config

config = load_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Clarity Compass API", version=__version__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
    logger.info("Rejected request to %s: %s", request.url.path, detail)
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {detail}"})


@app.get("/")
def health_check():
    return {"status": "healthy", "message": "Clarity Compass API is running"}


@app.get("/api/health")
def api_health():
    current = load_config()
    return {
        "status": "healthy",
        "version": __version__,
        "llm": "enabled" if current.llm_enabled else "disabled",
        "model": current.openai_model if current.llm_enabled else None,
    }


def run():
    import uvicorn
    logger.info("Starting uvicorn server on http://0.0.0.0:8000")
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
