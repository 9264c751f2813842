from pydantic import BaseModel, Field
from typing import Literal, Optional


Severity = Literal["None", "Mild", "Moderate", "Severe"]


class DiagnosisRequest(BaseModel):
    """Request body shared by both proxies: a data-URI encoded image."""
    imageData: Optional[str] = Field(default=None, description="Image as a data URI")


class DiagnosisResult(BaseModel):
    """Response model for disease diagnosis results."""
    diseaseName: str = Field(description="Disease name, or 'Healthy' if no issues were found")
    plantName: str = Field(description="Identified plant name")
    severity: Severity = Field(description="One of None, Mild, Moderate, Severe")
    symptoms: str
    treatment: str
    prevention: str
    confidence: int = Field(ge=0, le=100, description="Confidence score between 0 and 100")


class IdentificationResult(BaseModel):
    """Response model for plant identification results."""
    plantName: str
    scientificName: str
    plantType: str
    suitableEnvironment: str
    careInstructions: str
    confidence: int = Field(ge=0, le=100, description="Confidence score between 0 and 100")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(description="Error message")
