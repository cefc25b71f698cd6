from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from stay_with_friends.dependencies import get_db_engine
from stay_with_friends.routes._helpers import translate_errors
from stay_with_friends.services.stats import site_totals

router = APIRouter()


@router.get("/stats")
def stats(engine: Engine = Depends(get_db_engine)) -> dict[str, int]:
    """Site-wide totals of hosts, accepted connections and booking requests."""
    with translate_errors("stats"):
        return site_totals(engine)
