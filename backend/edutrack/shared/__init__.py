"""
Shared Module

Everything below the HTTP layer:
- Engine: Pure audience, visibility and progress functions
- Models: SQLAlchemy ORM models
- Repositories: Data access layer and the AudienceDataSource contract
- Services: Business logic layer
- Schemas: Typed records and API request/response models
- Core: Logging, exceptions

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Engine and session factory
    ├── engine/         ← Pure resolution functions
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    └── utils/          ← JWT helpers

Usage:
======
    from edutrack.shared.engine import filter_visible
    from edutrack.shared.services import AudienceService
    from edutrack.shared.schemas.entities import ContentItemRecord
    from edutrack.shared.core import logger, EdutrackException
"""
