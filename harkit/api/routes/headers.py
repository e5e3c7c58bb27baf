"""
Header filter settings API routes.
"""

from fastapi import APIRouter, Depends, HTTPException

from harkit.api.deps import get_header_settings
from harkit.api.schemas import HeaderFilterState, HeaderFilterUpdate
from harkit.codegen.headers import PRESETS, HeaderFilterSettings

router = APIRouter()


def _state(settings: HeaderFilterSettings) -> dict:
    state = HeaderFilterState(
        headers=settings.get(),
        active_preset=settings.active_preset(),
        presets=list(PRESETS),
    )
    return state.model_dump(by_alias=True)


@router.get("/headers")
def get_headers(settings: HeaderFilterSettings = Depends(get_header_settings)):
    """Current header filter list and matching preset."""
    return _state(settings)


@router.put("/headers")
def put_headers(
    update: HeaderFilterUpdate,
    settings: HeaderFilterSettings = Depends(get_header_settings),
):
    """Replace the header filter list."""
    settings.set(update.headers)
    return _state(settings)


@router.post("/headers/preset/{preset_name}")
def apply_preset(
    preset_name: str,
    settings: HeaderFilterSettings = Depends(get_header_settings),
):
    if not settings.apply_preset(preset_name):
        raise HTTPException(status_code=404, detail=f"Unknown preset '{preset_name}'")
    return _state(settings)


@router.post("/headers/reset")
def reset_headers(settings: HeaderFilterSettings = Depends(get_header_settings)):
    settings.reset()
    return _state(settings)
