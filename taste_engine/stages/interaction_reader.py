"""
Interaction reader: a user's recent events joined with recipe attributes.

Events whose recipe is no longer in the catalog are dropped (inner join), so
every returned event carries ``recipe``. Order is most recent first.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from ..models.interaction import InteractionEvent
from ..models.recipe import RecipeAttributes
from ..services.catalog import RecipeCatalog
from ..services.interaction_log import InteractionLog

logger = logging.getLogger(__name__)


def load_user_interactions(
    interaction_log: InteractionLog,
    catalog: RecipeCatalog,
    user_id: str,
    lookback_days: int,
    now: Optional[datetime] = None,
) -> List[InteractionEvent]:
    """Load the user's events from the last lookback_days with recipes attached."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=lookback_days)
    events = interaction_log.get_user_interactions(user_id, since=since)

    recipes: Dict[str, Optional[RecipeAttributes]] = {}
    joined: List[InteractionEvent] = []
    for event in events:
        if event.recipe_id not in recipes:
            recipes[event.recipe_id] = catalog.get_recipe(event.recipe_id)
        recipe = recipes[event.recipe_id]
        if recipe is None:
            continue
        joined.append(event.with_recipe(recipe))

    dropped = len(events) - len(joined)
    if dropped:
        logger.info(
            "[interactions] RECIPE_MISSING user_id=%s dropped=%s kept=%s",
            user_id, dropped, len(joined),
        )
    return joined
