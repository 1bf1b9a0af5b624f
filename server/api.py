"""
FastAPI surface over the binding registry.
Lets an out-of-process editor list, read, replace and validate profile bindings.
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from modules.bindings.registry import BindingRegistry
from .models import (
    BindingModel,
    ProfileBindingsResponse,
    ReplaceBindingsRequest,
    ReplaceBindingsResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)


def _profile_id(raw: str) -> str:
    # Path parameters arrive without the leading separator
    return raw if raw.startswith("/") else "/" + raw


def _registry(request: Request) -> BindingRegistry:
    return request.app.state.registry


def create_app(registry: BindingRegistry) -> FastAPI:
    """Build the API bound to ``registry``."""

    app = FastAPI(title="Controller Binding Registry", version="1.0.0")
    app.state.registry = registry

    @app.exception_handler(ValueError)
    async def invalid_profile_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/profiles", response_model=List[str])
    def list_profiles(request: Request):
        """List every profile with stored bindings"""
        return sorted(_registry(request).available_profiles())

    @app.get("/profiles/{profile_path:path}/validate", response_model=ValidationResponse)
    def validate_input(profile_path: str, input_path: str, request: Request):
        """Check whether the actions bound to ``input_path`` may coexist"""
        profile_id = _profile_id(profile_path)
        result = _registry(request).validate(profile_id, input_path)
        if result is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No bindings for {profile_id}")
        return ValidationResponse(
            profile=profile_id, input_path=input_path, legal=result.legal, reason=result.reason
        )

    @app.get("/profiles/{profile_path:path}", response_model=ProfileBindingsResponse)
    def get_profile(profile_path: str, request: Request):
        """Return the stored bindings of a profile"""
        profile_id = _profile_id(profile_path)
        bindings = _registry(request).load_profile(profile_id)
        if bindings is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No bindings for {profile_id}")
        return ProfileBindingsResponse(
            profile=profile_id,
            bindings=[
                BindingModel(action=entry.action, input_path=entry.input_path, namespace=entry.namespace)
                for entry in bindings.entries
            ],
        )

    @app.put("/profiles/{profile_path:path}", response_model=ReplaceBindingsResponse)
    def replace_profile(profile_path: str, body: ReplaceBindingsRequest, request: Request):
        """Overwrite the bindings of a profile"""
        profile_id = _profile_id(profile_path)
        pairs = [(binding.action, binding.input_path) for binding in body.bindings]
        resolution = _registry(request).replace_with_report(profile_id, pairs)
        if resolution is None:
            logger.error(f"Failed to save bindings for {profile_id}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save bindings",
            )
        return ReplaceBindingsResponse(
            profile=profile_id,
            saved=True,
            count=len(resolution.entries),
            conflicts={action: list(paths) for action, paths in resolution.conflicts.items()},
        )

    @app.delete("/profiles/{profile_path:path}")
    def delete_profile(profile_path: str, request: Request):
        """Delete the stored bindings of a profile"""
        profile_id = _profile_id(profile_path)
        if not _registry(request).delete(profile_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No bindings for {profile_id}")
        return {"status": "deleted", "profile": profile_id}

    return app
