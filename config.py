"""
Configuration — loads settings from environment / .env file.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).parent

# Hardware link (auth handshake)
AUTH_URL = os.getenv(
    "AUTH_URL", "https://auth.quantum-computing.ibm.com/api/users/loginWithToken"
)
LINK_TIMEOUT_SEC = float(os.getenv("LINK_TIMEOUT_SEC", "10"))

# Remote jobs
JOB_API_URL = os.getenv("JOB_API_URL", "https://api.quantum-computing.ibm.com/api")
JOB_BACKEND_NAME = os.getenv("JOB_BACKEND_NAME", "ibmq_qasm_simulator")
# The remote exchange is a timed stand-in unless explicitly switched off
REMOTE_JOB_SIMULATED = os.getenv("REMOTE_JOB_SIMULATED", "1").lower() in ("1", "true", "yes")
JOB_TIMEOUT_SEC = float(os.getenv("JOB_TIMEOUT_SEC", "60"))
JOB_POLL_INTERVAL_SEC = float(os.getenv("JOB_POLL_INTERVAL_SEC", "2"))
LOCAL_JOB_DELAY_SEC = float(os.getenv("LOCAL_JOB_DELAY_SEC", "1.5"))
REMOTE_JOB_DELAY_SEC = float(os.getenv("REMOTE_JOB_DELAY_SEC", "3"))

# Register
BIT_COUNT = 10
PARITY_KEY = "00**11--1"

# Event log
LOG_CAPACITY = 30

# Access gate
ACCESS_PIN = os.getenv("ACCESS_PIN", "5280")

# Postgres (artifact archive)
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost:5432/nexus_link")

# OpenAI (frame analysis)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1")

# Max characters of an upstream error body kept in the event log
MAX_DIAGNOSTIC_CHARS = 50
