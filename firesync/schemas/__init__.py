"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use strict Pydantic models with explicit types.
Enumerated fields are closed Literal sets; unknown values are rejected.
"""
