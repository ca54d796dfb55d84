# studyflow/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studyflow.core.config import settings
from studyflow.core.errors import AppError
from studyflow.models.db import engine, Base
from studyflow.models import entities  # Ensure models are registered
from studyflow.routers import admin, auth, files, notifications, pomodoro, profile, recommendations, tasks

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
log = logging.getLogger("studyflow")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- DB BOOTSTRAP ----------
def _init_db():
    Base.metadata.create_all(bind=engine)

_init_db()


# ---------- ERRORS ----------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request data", "errors": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ---------- API ROUTERS ----------
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(tasks.router)
app.include_router(pomodoro.router)
app.include_router(recommendations.router)
app.include_router(files.router)
app.include_router(notifications.router)
app.include_router(admin.router)


# ---------- HEALTH ----------
@app.get("/healthz")
def health():
    return {"ok": True, "app": settings.APP_NAME}


@app.get("/debug/llm")
def debug_llm():
    return {"has_key": settings.HAS_GROQ, "model": settings.GROQ_MODEL}
