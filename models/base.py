from pydantic import BaseModel


class BaseRecord(BaseModel):
    """Base model for records exchanged with iOS and web clients"""
    
    model_config = {
        "validate_assignment": True,
        "populate_by_name": True,
        "extra": "forbid",
    }
