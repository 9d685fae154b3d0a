"""
Match format presets
"""
from fastapi import APIRouter

from crease.api.schemas import FormatResponse
from crease.engine.formats import FORMAT_PRESETS

router = APIRouter(prefix="/formats", tags=["Formats"])


@router.get("", response_model=list[FormatResponse])
def list_formats():
    """Every preset the engine knows about"""
    return [FormatResponse.model_validate(factory()) for factory in FORMAT_PRESETS.values()]
