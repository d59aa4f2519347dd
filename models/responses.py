from pydantic import BaseModel, Field
from datetime import datetime


class ErrorResponse(BaseModel):
    """Error body returned by HTTPException handlers"""
    detail: str = Field(description="Detailed error message")

    class Config:
        json_schema_extra = {
            "example": {
                "detail": "Not authenticated"
            }
        }


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str = Field(description="Service status")
    version: str = Field(description="API version")
    timestamp: datetime = Field(default_factory=datetime.now, description="Health check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "timestamp": "2024-01-01T12:00:00Z"
            }
        }
