"""
API Module - HTTP surface for the game engine.

- schemas: Pydantic request/response models (camelCase on the wire)
- service: framework-agnostic business logic
- app: FastAPI application factory
"""

from .service import QueensService

__all__ = ["QueensService"]
