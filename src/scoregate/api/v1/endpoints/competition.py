"""Public competition status endpoint."""

from fastapi import APIRouter

from scoregate.core.settings import settings
from scoregate.services.competition import load_competition_state

router = APIRouter(prefix="/competition", tags=["competition"])


@router.get("")
def get_competition_state() -> dict[str, object]:
    """Report whether the competition is open and when it started or ended."""
    state = load_competition_state(settings.competition_state_file)
    return state.model_dump(by_alias=True)
