from .dtos import CreateRequest, RecordRequest, UpdateRequest

__all__ = ["CreateRequest", "UpdateRequest", "RecordRequest"]
