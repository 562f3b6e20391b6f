"""
Edutrack Backend

Internal training content distribution and read tracking.

Package Structure:
==================
    edutrack/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (engine, models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn edutrack.api.main:app --reload
"""
