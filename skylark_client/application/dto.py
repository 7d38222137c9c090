from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class QueryRequest:
    collection: str
    id: str = ""
    fields: List[str] = field(default_factory=list)
    expand: List[str] = field(default_factory=list)
    # (field name, operator suffix, value); an empty suffix means equality
    filters: List[Tuple[str, str, str]] = field(default_factory=list)
    order: Optional[str] = None
    timeout: Optional[float] = None
    destination: Any = None
