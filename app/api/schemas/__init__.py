from app.api.schemas.generate import GenerateRequest

__all__ = ["GenerateRequest"]
