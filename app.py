"""
FastAPI application — REST API for Nexus Link.

Endpoints:
  GET    /health                — Health check
  GET    /access                — Keypad state
  POST   /access/pin            — Feed one keypad digit
  POST   /access/lock           — Re-lock the kernel
  GET    /link                  — Link status
  POST   /link/authenticate     — Exchange an API token for a session
  POST   /jobs/run              — Run one job (remote or local)
  GET    /register              — Currently published register + weight
  GET    /display               — Active mode and its filter string
  POST   /display/mode          — Switch mode
  POST   /capture               — Capture an artifact
  GET    /artifacts             — List captured artifacts
  GET    /artifacts/{id}        — One artifact, image included
  DELETE /artifacts/{id}        — Purge an artifact
  GET    /logs                  — Event log, newest first
  GET    /logs/latest           — Newest event only
  DELETE /logs                  — Clear the event log
  POST   /analysis              — Multimodal reading of a still frame

Everything except /health and /access* requires the kernel to be unlocked.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

import config
from activities.analyze import analyze_frame
from features.artifacts import db as artifact_db
from features.display import Mode
from features.events import LogCategory
from features.link.errors import (
    CredentialRejected,
    JobPipelineInterrupted,
    LinkBusy,
    LinkUnreachable,
    MissingCredential,
    NexusError,
)
from runtime import NexusRuntime

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)

runtime: NexusRuntime | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global runtime
    # Initialize Postgres
    db = None
    try:
        artifact_db.init_db()
        db = artifact_db
        log.info("Postgres database initialized")
    except Exception as e:
        log.warning("Could not connect to Postgres: %s (artifacts will be in-memory only)", e)
    runtime = NexusRuntime(artifact_db=db)
    runtime.artifacts.load()
    yield


app = FastAPI(
    title="Nexus Link",
    description="Camera overlay backend with a hardware-link job pipeline",
    version="1.0.0",
    lifespan=lifespan,
)


def get_runtime() -> NexusRuntime:
    if runtime is None:
        raise HTTPException(status_code=503, detail="Runtime not initialized")
    return runtime


def require_unlocked(rt: NexusRuntime = Depends(get_runtime)) -> NexusRuntime:
    if rt.access.locked:
        raise HTTPException(status_code=423, detail="Kernel locked. Enter PIN.")
    return rt


_ERROR_STATUS: dict[type[NexusError], int] = {
    MissingCredential: 400,
    CredentialRejected: 401,
    LinkBusy: 409,
    LinkUnreachable: 502,
    JobPipelineInterrupted: 502,
}


def _http_error(e: NexusError) -> HTTPException:
    status_code = next((code for cls, code in _ERROR_STATUS.items() if isinstance(e, cls)), 500)
    return HTTPException(
        status_code=status_code,
        detail={"error": e.code, "message": str(e), "detail": e.detail},
    )


# ── Health ────────────────────────────────────────────────────────────

@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "nexus-link",
        "link_status": runtime.session.status.value if runtime else None,
    }


# ── Access ────────────────────────────────────────────────────────────

class PinRequest(BaseModel):
    digit: int


@app.get("/access")
def access_state(rt: NexusRuntime = Depends(get_runtime)):
    return asdict(rt.access.state())


@app.post("/access/pin")
def press_pin(req: PinRequest, rt: NexusRuntime = Depends(get_runtime)):
    try:
        state = rt.access.press(req.digit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return asdict(state)


@app.post("/access/lock")
def lock(rt: NexusRuntime = Depends(get_runtime)):
    return asdict(rt.access.lock())


# ── Link ──────────────────────────────────────────────────────────────

class AuthenticateRequest(BaseModel):
    api_token: str = ""


@app.get("/link")
def link_status(rt: NexusRuntime = Depends(require_unlocked)):
    snap = rt.session.snapshot()
    return {
        "status": snap.status.value,
        "session_preview": snap.session_preview,
        "has_credential": snap.has_credential,
    }


@app.post("/link/authenticate")
async def authenticate(req: AuthenticateRequest, rt: NexusRuntime = Depends(require_unlocked)):
    try:
        status = await rt.session.authenticate(req.api_token)
    except NexusError as e:
        raise _http_error(e)
    return {"status": status.value, "session_preview": rt.session.snapshot().session_preview}


# ── Jobs ──────────────────────────────────────────────────────────────

class JobRequest(BaseModel):
    remote: bool = True


@app.post("/jobs/run")
async def run_job(req: JobRequest, rt: NexusRuntime = Depends(require_unlocked)):
    try:
        register = await rt.executor.run_job(req.remote)
    except NexusError as e:
        raise _http_error(e)
    return {
        "bits": str(register),
        "weight": rt.weight,
        "link_status": rt.session.status.value,
    }


@app.get("/register")
def current_register(rt: NexusRuntime = Depends(require_unlocked)):
    return {
        "bits": str(rt.register.current),
        "register": list(rt.register.current.bits),
        "weight": rt.weight,
    }


# ── Display ───────────────────────────────────────────────────────────

class ModeRequest(BaseModel):
    mode: Mode


@app.get("/display")
def display(rt: NexusRuntime = Depends(require_unlocked)):
    return rt.display_state()


@app.post("/display/mode")
def set_mode(req: ModeRequest, rt: NexusRuntime = Depends(require_unlocked)):
    rt.display.set_mode(req.mode)
    return rt.display_state()


# ── Artifacts ─────────────────────────────────────────────────────────

class CaptureRequest(BaseModel):
    image_data: str


@app.post("/capture")
def capture(req: CaptureRequest, rt: NexusRuntime = Depends(require_unlocked)):
    if not req.image_data:
        raise HTTPException(status_code=400, detail="image_data is required")
    artifact = rt.artifacts.capture(req.image_data, rt.display.mode.value, rt.register.current)
    return artifact.to_dict(include_image=False)


@app.get("/artifacts")
def list_artifacts(include_images: bool = False, rt: NexusRuntime = Depends(require_unlocked)):
    artifacts = rt.artifacts.list()
    return {
        "artifacts": [a.to_dict(include_image=include_images) for a in artifacts],
        "count": len(artifacts),
    }


@app.get("/artifacts/{artifact_id}")
def get_artifact(artifact_id: str, rt: NexusRuntime = Depends(require_unlocked)):
    artifact = rt.artifacts.get(artifact_id)
    if artifact is None:
        raise HTTPException(status_code=404, detail=f"Artifact not found: {artifact_id}")
    return artifact.to_dict()


@app.delete("/artifacts/{artifact_id}")
def purge_artifact(artifact_id: str, rt: NexusRuntime = Depends(require_unlocked)):
    if not rt.artifacts.purge(artifact_id):
        raise HTTPException(status_code=404, detail=f"Artifact not found: {artifact_id}")
    return {"purged": artifact_id}


# ── Event log ─────────────────────────────────────────────────────────

@app.get("/logs")
def get_logs(rt: NexusRuntime = Depends(require_unlocked)):
    entries = rt.events.entries()
    return {"entries": [asdict(e) for e in entries], "count": len(entries)}


@app.get("/logs/latest")
def latest_log(rt: NexusRuntime = Depends(require_unlocked)):
    entry = rt.events.latest()
    return {"entry": asdict(entry) if entry else None}


@app.delete("/logs")
def clear_logs(rt: NexusRuntime = Depends(require_unlocked)):
    rt.events.clear()
    return {"count": 0}


# ── Analysis ──────────────────────────────────────────────────────────

class AnalysisRequest(BaseModel):
    image_data: str


@app.post("/analysis")
async def analysis(req: AnalysisRequest, rt: NexusRuntime = Depends(require_unlocked)):
    if rt.analyzing:
        raise HTTPException(status_code=409, detail="Analysis already running")
    rt.analyzing = True
    rt.events.record(LogCategory.QML, "Aligning spectrum nodes...")
    mode, weight = rt.display.mode.value, rt.weight
    loop = asyncio.get_running_loop()
    try:
        text = await loop.run_in_executor(None, analyze_frame, req.image_data, mode, weight)
    except Exception as e:
        log.error("Frame analysis failed: %s", e)
        rt.events.record(LogCategory.ERR, "QML secure link timeout.", e.__class__.__name__)
        raise HTTPException(status_code=502, detail="Analysis failed")
    finally:
        rt.analyzing = False
    rt.events.record(LogCategory.AI, "Spectrum sync verified.")
    return {"analysis": text, "mode": mode, "weight": weight, "model": config.OPENAI_MODEL}
