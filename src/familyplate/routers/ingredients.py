"""API routes for ingredient line parsing."""

from fastapi import APIRouter

from familyplate.logging_config import get_logger
from familyplate.normalize import parse_ingredient
from familyplate.schemas import ParsedIngredientSchema, ParseRequest, ParseResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


@router.post("/parse", response_model=ParseResponse)
async def parse_lines(request: ParseRequest) -> ParseResponse:
    """
    Parse free-text ingredient lines into quantity, unit and name.

    Parsing never fails; unreadable lines come back as quantity 1 with
    the trimmed line as the name. Blank lines are dropped.
    """
    lines = [line for line in request.lines if line and line.strip()]
    logger.debug(f"Parsing {len(lines)} ingredient lines")
    return ParseResponse(
        items=[ParsedIngredientSchema.from_parsed(parse_ingredient(line)) for line in lines]
    )
