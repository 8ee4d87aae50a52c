import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.event_routes import router as event_router
from api.geocoding_routes import router as geocoding_router
from api.status import router as status_router
from api.trips_routes import router as trips_router
from core.load_plugins import load_plugins

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_plugins()
    yield


app = FastAPI(title="Event Travel Footprint Backend", lifespan=lifespan)

# CORS (adjust for your frontend)
origins = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:4200").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routes
app.include_router(trips_router)
app.include_router(geocoding_router)
app.include_router(event_router)
app.include_router(status_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
