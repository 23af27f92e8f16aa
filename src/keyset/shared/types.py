from collections.abc import Callable
from typing import Any


type JsonLoads = Callable[..., Any]
type JsonDumps = Callable[..., str]
