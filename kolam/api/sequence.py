"""POST /api/sequence — ordered construction steps."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from kolam.dependencies import get_engine_config
from kolam.engine.config import EngineConfig
from kolam.engine.sequencer import sequence as sequence_pattern
from kolam.models.requests import SequenceRequest
from kolam.models.responses import StepModel, StepsResponse

router = APIRouter()


@router.post("/sequence", response_model=StepsResponse)
async def sequence(
    req: SequenceRequest,
    config: EngineConfig = Depends(get_engine_config),
) -> StepsResponse:
    pattern = req.pattern.to_pattern()
    steps = sequence_pattern(pattern, config)
    return StepsResponse(pattern_id=pattern.id, steps=[StepModel.from_step(s) for s in steps])
