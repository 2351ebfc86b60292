from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field


class Part(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None


class Content(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class GenerateResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    candidates: List[Candidate] = Field(default_factory=list)


class ExtractionResult(BaseModel):
    text: str
    total_chunks: int = Field(..., ge=0)
    processed_chunks: int = Field(..., ge=0)

    @computed_field
    @property
    def dropped_chunks(self) -> int:
        return self.total_chunks - self.processed_chunks
