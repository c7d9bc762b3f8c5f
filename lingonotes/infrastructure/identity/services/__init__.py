from .token_service_adapter import TokenServiceAdapter

__all__ = ["TokenServiceAdapter"]
