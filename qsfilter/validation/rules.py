from typing import Optional

from .. import config
from ..filters import Limit, OrderBy
from ..schema import FilterSchema


def assert_order_allowed(entity: str, order_by: Optional[OrderBy], schema: FilterSchema) -> None:
    if order_by is None:
        return
    allowed = {f.name for f in schema.fields if not f.skip}
    if order_by.id.name not in allowed:
        raise ValueError(f"Sort field not allowed for {entity}: {order_by.id.name}")


def cap_limit(limit: Optional[Limit], max_limit: int = config.GLOBAL_MAX_LIMIT) -> int:
    if limit is None or limit.value <= 0:
        return min(config.DEFAULT_LIMIT, max_limit)
    return min(limit.value, max_limit)
