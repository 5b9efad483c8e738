# app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import CONFIG
from app.core.errors import RetrievalFailure
from app.routes.student_routes import router as student_router

app = FastAPI(
    title="Academic Connect – Marks API",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RetrievalFailure)
async def retrieval_failure_handler(request: Request, exc: RetrievalFailure):
    # Only the fixed message leaves the server; the cause is already logged
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(student_router)
