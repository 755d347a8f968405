from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from roadaware.api import router as roadaware_router
from roadaware.errors import InvalidInputError
from roadaware.logging import setup_logger
from roadaware.settings import settings

setup_logger()

app = FastAPI(title="RoadAware Relay")
app.include_router(roadaware_router)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning(f"Rejected {request.url.path}: {exc.to_dict()}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.on_event("startup")
async def startup_event():
    if not settings.PROVIDER_ENDPOINT:
        logger.warning("PROVIDER_ENDPOINT is not set; analysis requests will fail until it is configured.")
    else:
        logger.info(f"Relaying to deployment '{settings.PROVIDER_DEPLOYMENT}' at {settings.PROVIDER_ENDPOINT}")


@app.get("/health")
def health_check():
    logger.info("Health check endpoint called.")
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=True)
