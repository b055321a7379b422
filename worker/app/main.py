from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from worker.app.routers import health
from worker.app.routers import status as status_router
from worker.app.routers import sample as sample_router
from worker.app.config import settings as C

logging.basicConfig(
    level=getattr(logging, C.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="jsonsampler-worker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=C.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(status_router.router)
app.include_router(sample_router.router)


@app.on_event("startup")
async def _startup_log():
    logging.info(
        f"[worker] list_length={C.DEFAULT_LIST_LENGTH} "
        f"max_display_lines={C.MAX_DISPLAY_LINES} "
        f"auth={'on' if C.WORKER_AUTH_TOKEN.strip() else 'off'}"
    )
    logging.info("[worker] Routes: /health /status /sample")


@app.get("/")
async def root():
    return {"message": "jsonsampler Worker Service"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=C.PORT_WORKER)
