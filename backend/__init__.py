# backend -- FastAPI server + SQLAlchemy models
#
# Modules:
#   app            -- FastAPI application with lifespan management
#   database       -- PostgreSQL / SQLite async engine
#   models         -- SQLAlchemy ORM models (companies, schemes, relations, evidence, ...)
#   schemas        -- Pydantic request/response schemas
#   deps           -- request dependencies (repository, LLM explainer)
#   seed           -- starter scheme catalog + relations
#   import_schemes -- JSON/CSV -> database scheme import
#   routes/        -- API endpoints (companies, schemes, evidence, godmode, esg)
