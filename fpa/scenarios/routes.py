"""Scenario routes: cloning with adjustments."""
from fastapi import APIRouter, Depends

from fpa.dependencies import get_store
from fpa.scenarios import schemas
from fpa.scenarios.cloner import clone_scenario
from fpa.store.base import RecordStore

router = APIRouter()


@router.post("/clone", response_model=schemas.ScenarioCloneResponse)
async def clone(
    data: schemas.ScenarioCloneRequest,
    store: RecordStore = Depends(get_store),
):
    """Create a new scenario from an existing one, applying adjustments."""
    new_version = await clone_scenario(
        store,
        data.base_scenario,
        data.new_scenario,
        data.adjustments,
        base_version=data.base_version,
    )
    return schemas.ScenarioCloneResponse(
        message=f"Scenario '{data.new_scenario}' created successfully from '{data.base_scenario}'",
        new_scenario=data.new_scenario,
        version=new_version,
    )
