from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    type: str = Field(min_length=1)
    provider: Optional[str] = None
    namespace: Optional[str] = None
    name: Optional[str] = None
    revision: Optional[str] = None


class SummarizeRequest(BaseModel):
    coordinate: Coordinate
    # harvested facts are untrusted and ecosystem specific: kept as raw JSON
    facts: Dict[str, Any] = Field(default_factory=dict)
    contributors: Optional[List[str]] = None
    policy: Optional[str] = None


class InterestingFile(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: str
    # harvested passthrough: kept as given, whatever its type
    token: Any = None
    license: Optional[str] = None


class Described(BaseModel):
    model_config = ConfigDict(extra="allow")

    projectWebsite: Optional[str] = None
    releaseDate: Optional[str] = None
    issueTracker: Optional[str] = None
    urls: Optional[Dict[str, str]] = None


class Licensed(BaseModel):
    declared: Optional[str] = None


class Definition(BaseModel):
    described: Optional[Described] = None
    licensed: Optional[Licensed] = None
    files: Optional[List[InterestingFile]] = None
