"""
FastAPI application entrypoint.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from api.routes import router, session

logging.basicConfig(level=logging.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    session.load()
    yield
    session.stop()


app = FastAPI(title="Face Emotion Live API", version="1.0.0", lifespan=lifespan)
app.include_router(router)

@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
