from pydantic import BaseModel, Field
from typing import List, Dict, Any

class ColumnMetadata(BaseModel):
    """One column of the decoded file"""
    name: str
    type: str = Field(..., description="Type label derived from the file schema")

class UploadResponse(BaseModel):
    """Response model for the upload endpoint"""
    data: List[Dict[str, Any]] = Field(..., description="Decoded rows, 64-bit integers as strings")
    columns: List[ColumnMetadata]

class ErrorResponse(BaseModel):
    error: str
