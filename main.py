# main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from parking.routers import router as fees_router, get_engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# fail at startup on a bad ENABLED_RULES rather than on the first request
engine = get_engine()
logger.info("fee engine ready with rules: %s", ", ".join(engine.rule_names))

app = FastAPI(
    title=settings.APP_TITLE,
    description="Quotes the fee for a single parking session using the cheapest applicable rate rule.",
    version="1.0.0",
    contact={
        "name": "API Support",
        "email": "support@example.com",
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(fees_router, prefix=settings.API_PREFIX)


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Welcome to the Parking Fee API"}
