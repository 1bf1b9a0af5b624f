"""
Request and response models for the binding HTTP API
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BindingModel(BaseModel):
    """One action bound to one input"""
    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(min_length=1)
    input_path: str = Field(alias="inputPath", min_length=1)
    namespace: Optional[str] = None


class ProfileBindingsResponse(BaseModel):
    """Stored bindings of a profile"""
    profile: str
    bindings: List[BindingModel]


class ReplaceBindingsRequest(BaseModel):
    """Full binding set replacing the stored one"""
    bindings: List[BindingModel]


class ReplaceBindingsResponse(BaseModel):
    profile: str
    saved: bool
    count: int
    conflicts: Dict[str, List[str]] = Field(default_factory=dict)


class ValidationResponse(BaseModel):
    """Legality of the actions sharing one input"""
    profile: str
    input_path: str = Field(alias="inputPath")
    legal: bool
    reason: Optional[str] = None
    model_config = ConfigDict(populate_by_name=True)
