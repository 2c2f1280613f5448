from typing import Any

import orjson
from pydantic import BaseModel
from pydantic_duality import DualBaseModel


def pydantic_orjson_dumps(v: Any, *, default: Any) -> str:
    return orjson.dumps(v, option=orjson.OPT_NON_STR_KEYS, default=_orjson_default).decode()


def _orjson_default(obj):
    if isinstance(obj, BaseModel):
        return obj.dict()
    raise TypeError


# DualBaseModel creates two classes for the model:
# one with extra = "forbid" (CoreModel/CoreModel.__request__),
# and another with extra = "ignore" (CoreModel.__response__).
# App declarations are parsed strictly, so a typo in a field name is reported
# instead of being silently dropped.
class CoreModel(DualBaseModel):
    class Config:
        json_loads = orjson.loads
        json_dumps = pydantic_orjson_dumps
